"""Errors raised by the statistic engine."""


class StatisticError(ValueError):
    """Base class for every failure raised while computing a statistic."""


class InvalidRangeError(StatisticError):
    """Raised when a ``begin``/``length`` window does not fit a well."""


class InvalidParameterError(StatisticError):
    """Raised when a statistic parameter or weight vector is missing or out of range."""


class InsufficientDataError(StatisticError):
    """Raised when a sequence is too short for the statistic being computed."""


__all__ = ["StatisticError", "InvalidRangeError", "InvalidParameterError", "InsufficientDataError"]
