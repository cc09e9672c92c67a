"""Labelled collections of wells."""
from typing import Dict, Iterable, Iterator, List, Optional, Union

from .well import Well, WellIndex

DEFAULT_SET_LABEL = "WellSet"


class WellSet:
    """Wells unique by index, iterated in row-major index order.

    Identity is the label: two sets with the same label are the same key in
    a result mapping.
    """

    def __init__(self, wells: Iterable[Well] = (), label: str = DEFAULT_SET_LABEL):
        self.label = label
        self._wells: Dict[WellIndex, Well] = {}
        for well in wells:
            self._wells[well.index] = well

    def size(self) -> int:
        return len(self._wells)

    def wells(self) -> List[Well]:
        return [self._wells[index] for index in sorted(self._wells)]

    def contains(self, well: Union[Well, str]) -> bool:
        return self._lookup(well) in self._wells

    def get(self, well: Union[Well, str]) -> Optional[Well]:
        return self._wells.get(self._lookup(well))

    def first(self) -> Well:
        if not self._wells:
            raise IndexError(f"Well set {self.label} is empty")
        return self._wells[min(self._wells)]

    def _lookup(self, well: Union[Well, str]) -> WellIndex:
        if isinstance(well, Well):
            return well.index
        return WellIndex.parse(well)

    def __iter__(self) -> Iterator[Well]:
        return iter(self.wells())

    def __len__(self) -> int:
        return len(self._wells)

    def __contains__(self, well: object) -> bool:
        return isinstance(well, (Well, str)) and self.contains(well)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WellSet):
            return NotImplemented
        return self.label == other.label

    def __lt__(self, other: "WellSet") -> bool:
        return self.label < other.label

    def __hash__(self) -> int:
        return hash(("WellSet", self.label))

    def __repr__(self) -> str:
        return f"WellSet({self.label!r}, wells={self.size()})"
