"""Lookup of statistics by name."""
from typing import Dict, List

from .base import DescriptiveStatistic
from .descriptive import (
    CoefficientOfVariation,
    GeometricMean,
    Kurtosis,
    Max,
    Mean,
    Min,
    N,
    Range,
    Skewness,
    StandardDeviation,
    StandardError,
    Sum,
    SumOfSquares,
    Variance,
)
from .quantile import EqualBins, InterquartileRange, Median, Percentile, Quantile

STATISTICS: Dict[str, DescriptiveStatistic] = {
    statistic.name: statistic
    for statistic in (
        N(),
        Sum(),
        SumOfSquares(),
        Mean(),
        GeometricMean(),
        Min(),
        Max(),
        Range(),
        Variance(),
        StandardDeviation(),
        StandardError(),
        CoefficientOfVariation(),
        Skewness(),
        Kurtosis(),
        Median(),
        Percentile(),
        Quantile(),
        InterquartileRange(),
        EqualBins(),
    )
}


def get_statistic(name: str) -> DescriptiveStatistic:
    if name not in STATISTICS:
        raise KeyError(f"Unknown statistic: {name}")
    return STATISTICS[name]


def available_statistics() -> List[str]:
    return list(STATISTICS)


__all__ = ["STATISTICS", "get_statistic", "available_statistics"]
