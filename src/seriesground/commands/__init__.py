"""Shell commands exposing SeriesGround functionalities.

Describe (pyground-series)
==========================

``pyground-series`` prints a series of values given on the command line
together with its statistics::

    pyground-series 7 1 3 4

Values that are all numbers are parsed as numbers, otherwise they are kept
as strings. Passing ``--group`` also prints how many times each value appears::

    pyground-series --group apple banana apple banana apple
"""
