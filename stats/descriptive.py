"""Moment and extreme-value statistics."""
import math
from typing import List

import numpy as np
from scipy import stats as sp_stats

from .base import DescriptiveStatistic
from .errors import StatisticError


def _require_spread(values: List[float], name: str) -> None:
    if max(values) == min(values):
        raise StatisticError(f"{name} is undefined when every reading is identical")


class N(DescriptiveStatistic):
    """Number of readings. Defined for empty wells; aggregation sums the counts."""

    name = "n"
    min_values = 0

    def _calculate(self, values: List[float]) -> int:
        return len(values)


class Sum(DescriptiveStatistic):
    name = "sum"
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return math.fsum(values)


class SumOfSquares(DescriptiveStatistic):
    name = "sum_of_squares"
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return math.fsum(value * value for value in values)


class Mean(DescriptiveStatistic):
    name = "mean"
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return float(np.mean(values))


class GeometricMean(DescriptiveStatistic):
    name = "geometric_mean"
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        if any(value < 0 for value in values):
            raise StatisticError("Geometric mean is undefined for negative readings")
        if any(value == 0 for value in values):
            return 0.0
        return float(sp_stats.gmean(values))


class Min(DescriptiveStatistic):
    name = "min"
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return float(min(values))


class Max(DescriptiveStatistic):
    name = "max"
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return float(max(values))


class Range(DescriptiveStatistic):
    name = "range"
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return float(max(values) - min(values))


class Variance(DescriptiveStatistic):
    """Sample (n - 1) variance."""

    name = "variance"
    min_values = 2
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return float(np.var(values, ddof=1))


class StandardDeviation(DescriptiveStatistic):
    """Sample (n - 1) standard deviation."""

    name = "standard_deviation"
    min_values = 2
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return float(np.std(values, ddof=1))


class StandardError(DescriptiveStatistic):
    name = "standard_error"
    min_values = 2
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        return float(np.std(values, ddof=1) / math.sqrt(len(values)))


class CoefficientOfVariation(DescriptiveStatistic):
    """Sample standard deviation divided by the mean."""

    name = "coefficient_of_variation"
    min_values = 2
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        mean = float(np.mean(values))
        if mean == 0:
            raise StatisticError("Coefficient of variation is undefined for a zero mean")
        return float(np.std(values, ddof=1)) / mean


class Skewness(DescriptiveStatistic):
    """Bias-corrected sample skewness."""

    name = "skewness"
    min_values = 3
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        _require_spread(values, self.name)
        return float(sp_stats.skew(values, bias=False))


class Kurtosis(DescriptiveStatistic):
    """Bias-corrected excess kurtosis."""

    name = "kurtosis"
    min_values = 4
    weighted = True

    def _calculate(self, values: List[float]) -> float:
        _require_spread(values, self.name)
        return float(sp_stats.kurtosis(values, fisher=True, bias=False))
