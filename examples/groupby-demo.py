from seriesground import Series, SumAggregation

fruits = Series.from_values(["apple", "banana", "apple", "banana", "apple", "orange"])
grouped = fruits.groupby()
print("Groups:", grouped.groups())
print("Counts:", grouped.aggregate(len).to_pylist())

numbers = Series.from_values([5, 10, 5, 20, 10, 5, 20])
grouped = numbers.groupby()
print("Groups:", grouped.groups())
print("Sums:", grouped.aggregate(SumAggregation()).to_pylist())

print(numbers.sort_by(descending=True))
print("median:", numbers.median(), "std:", numbers.std())
