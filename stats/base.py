"""Dispatch core shared by every descriptive statistic.

A concrete statistic only supplies its reduction (``_calculate``) plus a few
class attributes. Everything else, per-well fan-out over plates and well
sets, pooled aggregation, windowing and weighting, lives here so that every
statistic exposes the same operations with the same semantics:

- ``well``: one well, one value.
- ``plate`` / ``set``: one value per well, keyed by well.
- ``plates_aggregated`` / ``sets_aggregated``: readings of every well pooled
  into one sequence and reduced once. Given an iterable of plates or sets the
  result is keyed by plate or set.

Every operation accepts an optional ``begin``/``length`` window which is
applied to each well *before* pooling.
"""
from numbers import Integral
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from plate.plate import Plate
from plate.well import Well
from plate.wellset import WellSet

from .errors import InsufficientDataError, InvalidParameterError, InvalidRangeError

Number = Union[int, float]
Container = TypeVar("Container", Plate, WellSet)


class DescriptiveStatistic:
    """Base class for a statistic computed over well readings.

    Subclasses set:

    - ``name``: registry key.
    - ``min_values``: shortest sequence the reduction accepts.
    - ``parameters``: names of required keyword parameters.
    - ``weighted``: whether a ``weights`` vector may be supplied.
    """

    name: str = ""
    min_values: int = 1
    parameters: Tuple[str, ...] = ()
    weighted: bool = False

    # Reduction

    def calculate(self, values: Sequence[Number], **params: Any) -> Any:
        """Reduce a plain sequence of numbers."""
        self._check_params(params)
        return self._reduce(list(values), params)

    def _calculate(self, values: List[float], **params: Any) -> Any:
        raise NotImplementedError

    def validate(self, **params: Any) -> None:
        """Hook for range checks on statistic parameters."""

    # Single well

    def well(
        self,
        well: Well,
        begin: Optional[int] = None,
        length: Optional[int] = None,
        *,
        weights: Optional[Sequence[float]] = None,
        **params: Any,
    ) -> Any:
        self._check_params(params, weights)
        return self._reduce(self._sample(well, begin, length, weights), params)

    # Per-well fan-out

    def plate(
        self,
        plate: Plate,
        begin: Optional[int] = None,
        length: Optional[int] = None,
        *,
        weights: Optional[Sequence[float]] = None,
        **params: Any,
    ) -> Dict[Well, Any]:
        return self._per_well(plate, begin, length, weights, params)

    def set(
        self,
        well_set: WellSet,
        begin: Optional[int] = None,
        length: Optional[int] = None,
        *,
        weights: Optional[Sequence[float]] = None,
        **params: Any,
    ) -> Dict[Well, Any]:
        return self._per_well(well_set, begin, length, weights, params)

    # Aggregation

    def plates_aggregated(
        self,
        plates: Union[Plate, Iterable[Plate]],
        begin: Optional[int] = None,
        length: Optional[int] = None,
        *,
        weights: Optional[Sequence[float]] = None,
        **params: Any,
    ) -> Union[Any, Dict[Plate, Any]]:
        if isinstance(plates, Plate):
            return self._aggregate(plates, begin, length, weights, params)
        return self._aggregate_each(plates, begin, length, weights, params)

    def sets_aggregated(
        self,
        sets: Union[WellSet, Iterable[WellSet]],
        begin: Optional[int] = None,
        length: Optional[int] = None,
        *,
        weights: Optional[Sequence[float]] = None,
        **params: Any,
    ) -> Union[Any, Dict[WellSet, Any]]:
        if isinstance(sets, WellSet):
            return self._aggregate(sets, begin, length, weights, params)
        return self._aggregate_each(sets, begin, length, weights, params)

    # Internals

    def _per_well(
        self,
        container: Container,
        begin: Optional[int],
        length: Optional[int],
        weights: Optional[Sequence[float]],
        params: Dict[str, Any],
    ) -> Dict[Well, Any]:
        self._check_params(params, weights)
        samples = [(well, self._sample(well, begin, length, weights)) for well in container]
        return {well: self._reduce(values, params) for well, values in samples}

    def _aggregate(
        self,
        container: Container,
        begin: Optional[int],
        length: Optional[int],
        weights: Optional[Sequence[float]],
        params: Dict[str, Any],
    ) -> Any:
        self._check_params(params, weights)
        return self._reduce(self._pool(container, begin, length, weights), params)

    def _aggregate_each(
        self,
        containers: Iterable[Container],
        begin: Optional[int],
        length: Optional[int],
        weights: Optional[Sequence[float]],
        params: Dict[str, Any],
    ) -> Dict[Container, Any]:
        self._check_params(params, weights)
        pooled = [(container, self._pool(container, begin, length, weights)) for container in containers]
        results: Dict[Container, Any] = {}
        for container, values in pooled:
            results[container] = self._reduce(values, params)
        return results

    def _pool(
        self,
        container: Container,
        begin: Optional[int],
        length: Optional[int],
        weights: Optional[Sequence[float]],
    ) -> List[float]:
        pooled: List[float] = []
        for well in container:
            pooled.extend(self._sample(well, begin, length, weights))
        return pooled

    def _sample(
        self,
        well: Well,
        begin: Optional[int],
        length: Optional[int],
        weights: Optional[Sequence[float]],
    ) -> List[float]:
        values = list(self._window(well, begin, length))
        if weights is None:
            return values
        if len(weights) < len(values):
            raise InvalidParameterError(
                f"{len(weights)} weights supplied for {len(values)} readings of well {well.id}"
            )
        return [value * weight for value, weight in zip(values, weights)]

    def _window(self, well: Well, begin: Optional[int], length: Optional[int]) -> Sequence[float]:
        if begin is None and length is None:
            return well.readings
        if begin is None or length is None:
            raise InvalidRangeError("begin and length must be given together")
        for bound in (begin, length):
            if isinstance(bound, bool) or not isinstance(bound, Integral):
                raise InvalidRangeError(f"begin and length must be integers, got {bound!r}")
        if begin < 0:
            raise InvalidRangeError(f"begin must be non-negative, got {begin}")
        if length < 1:
            raise InvalidRangeError(f"length must be at least 1, got {length}")
        if begin + length > well.size():
            raise InvalidRangeError(
                f"Range [{begin}, {begin + length}) is outside well {well.id} holding {well.size()} readings"
            )
        return well.readings[begin : begin + length]

    def _check_params(self, params: Dict[str, Any], weights: Optional[Sequence[float]] = None) -> None:
        missing = [name for name in self.parameters if name not in params]
        if missing:
            raise InvalidParameterError(f"{self.name} requires parameter(s): {', '.join(missing)}")
        unknown = sorted(set(params) - set(self.parameters))
        if unknown:
            raise InvalidParameterError(f"{self.name} does not accept parameter(s): {', '.join(unknown)}")
        if weights is not None and not self.weighted:
            raise InvalidParameterError(f"{self.name} does not support weights")
        self.validate(**params)

    def _reduce(self, values: List[float], params: Dict[str, Any]) -> Any:
        if len(values) < self.min_values:
            raise InsufficientDataError(
                f"{self.name} requires at least {self.min_values} value(s), got {len(values)}"
            )
        return self._calculate(values, **params)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
