"""Fixed-geometry microplates."""
from typing import Dict, Iterable, Iterator, List, Optional, Union

from .formats import FormatLibrary
from .well import PlateLayoutError, Well, WellIndex
from .wellset import WellSet

DEFAULT_PLATE_LABEL = "Plate"


class Plate:
    """A rows x columns grid of wells.

    Wells are iterated row-major. ``data_set()`` exposes the same wells as a
    :class:`WellSet` carrying the plate label. Identity is the label.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        label: str = DEFAULT_PLATE_LABEL,
        wells: Iterable[Well] = (),
        descriptor: Optional[str] = None,
    ):
        if rows < 1 or columns < 1:
            raise PlateLayoutError(f"Plate dimensions must be positive: {rows}x{columns}")
        self.rows = rows
        self.columns = columns
        self.label = label
        self.descriptor = descriptor or f"{rows * columns}-well"
        self._wells: Dict[WellIndex, Well] = {}
        for well in wells:
            self.add(well)

    @classmethod
    def from_format(
        cls, format_name: str, label: str = DEFAULT_PLATE_LABEL, wells: Iterable[Well] = (), library=None
    ) -> "Plate":
        plate_format = (library or FormatLibrary()).get_format(format_name)
        return cls(plate_format.rows, plate_format.columns, label=label, wells=wells, descriptor=plate_format.name)

    def add(self, well: Well) -> None:
        if well.row >= self.rows or well.column > self.columns:
            raise PlateLayoutError(
                f"Well {well.id} is outside the {self.rows}x{self.columns} layout of plate {self.label}"
            )
        self._wells[well.index] = well

    def size(self) -> int:
        return self.rows * self.columns

    def wells(self) -> List[Well]:
        return [self._wells[index] for index in sorted(self._wells)]

    def data_set(self) -> WellSet:
        return WellSet(self.wells(), label=self.label)

    def first(self) -> Well:
        if not self._wells:
            raise IndexError(f"Plate {self.label} holds no wells")
        return self._wells[min(self._wells)]

    def get(self, well: Union[Well, str]) -> Optional[Well]:
        index = well.index if isinstance(well, Well) else WellIndex.parse(well)
        return self._wells.get(index)

    def __iter__(self) -> Iterator[Well]:
        return iter(self.wells())

    def __len__(self) -> int:
        return len(self._wells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plate):
            return NotImplemented
        return self.label == other.label

    def __lt__(self, other: "Plate") -> bool:
        return self.label < other.label

    def __hash__(self) -> int:
        return hash(("Plate", self.label))

    def __repr__(self) -> str:
        return f"Plate({self.label!r}, {self.rows}x{self.columns}, wells={len(self)})"
