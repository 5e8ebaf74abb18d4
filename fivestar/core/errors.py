class FiveStarError(Exception):
    """Base class for errors raised by the rating engine."""


class ThresholdTableError(FiveStarError, ValueError):
    """
    A threshold table is malformed (missing star level, tier out of
    order, unknown severity letter in the point matrix).

    Bad facility data never raises this; only a broken table does.
    """
