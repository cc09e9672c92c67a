"""Order statistics: percentiles, quantiles, interquartile range and binning."""
import math
from numbers import Integral, Real
from typing import List

import numpy as np

from .base import DescriptiveStatistic
from .errors import InvalidParameterError

# Interpolated estimator with position p * (n + 1), clamped to the first and
# last order statistic.
ESTIMATION_METHOD = "weibull"


def interpolated_quantile(values: List[float], q: float) -> float:
    return float(np.quantile(np.asarray(values, dtype=float), q, method=ESTIMATION_METHOD))


class Percentile(DescriptiveStatistic):
    """Percentile at integer rank ``p`` in 1-100."""

    name = "percentile"
    parameters = ("p",)

    def validate(self, p) -> None:
        if isinstance(p, bool) or not isinstance(p, Integral) or not 1 <= p <= 100:
            raise InvalidParameterError(f"Percentile is outside the valid range 1-100: {p!r}")

    def _calculate(self, values: List[float], p: int) -> float:
        return interpolated_quantile(values, p / 100.0)


class Quantile(DescriptiveStatistic):
    """Quantile at fraction ``q`` in (0, 1]."""

    name = "quantile"
    parameters = ("q",)

    def validate(self, q) -> None:
        if isinstance(q, bool) or not isinstance(q, Real) or not 0 < q <= 1:
            raise InvalidParameterError(f"Quantile is outside the valid range (0, 1]: {q!r}")

    def _calculate(self, values: List[float], q: float) -> float:
        return interpolated_quantile(values, float(q))


class Median(DescriptiveStatistic):
    name = "median"

    def _calculate(self, values: List[float]) -> float:
        return interpolated_quantile(values, 0.5)


def _middle(values: List[float]) -> float:
    low = (len(values) - 1) // 2
    high = len(values) // 2
    return (values[low] + values[high]) / 2


class InterquartileRange(DescriptiveStatistic):
    """Difference between the medians of the upper and lower halves.

    For an odd number of values the middle value belongs to neither half.
    """

    name = "interquartile_range"
    min_values = 2

    def _calculate(self, values: List[float]) -> float:
        ordered = sorted(values)
        half = len(ordered) // 2
        lower = ordered[:half]
        upper = ordered[half + len(ordered) % 2 :]
        return float(_middle(upper) - _middle(lower))


class EqualBins(DescriptiveStatistic):
    """Split values into ``bins`` equal-width bins spanning [min, max].

    The maximum always falls in the last bin. Each bin is returned sorted.
    """

    name = "equal_bins"
    parameters = ("bins",)

    def validate(self, bins) -> None:
        if isinstance(bins, bool) or not isinstance(bins, Integral) or bins < 1:
            raise InvalidParameterError(f"Bin count must be a positive integer: {bins!r}")

    def _calculate(self, values: List[float], bins: int) -> List[List[float]]:
        ordered = sorted(float(value) for value in values)
        low, high = ordered[0], ordered[-1]
        width = (high - low) / bins
        result: List[List[float]] = [[] for _ in range(bins)]
        for value in ordered:
            if width == 0:
                index = bins - 1
            else:
                index = min(int(math.floor((value - low) / width)), bins - 1)
            result[index].append(value)
        return result
