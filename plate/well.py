"""Well value types: a grid index plus an ordered sequence of readings."""
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple, Union

ALPHA_BASE = 26
_WELL_ID = re.compile(r"^\s*([A-Za-z]+)\s*0*(\d+)\s*$")


class PlateLayoutError(ValueError):
    """Raised when a well id or a well position does not fit a plate layout."""


def row_to_index(row: str) -> int:
    """Convert a row label (``A``, ``H``, ``AA``) to a zero-based row number."""
    index = 0
    for char in row.upper():
        index = index * ALPHA_BASE + (ord(char) - ord("A") + 1)
    return index - 1


def index_to_row(index: int) -> str:
    if index < 0:
        raise PlateLayoutError(f"Row index must be non-negative: {index}")
    label = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, ALPHA_BASE)
        label = chr(ord("A") + remainder) + label
    return label


@dataclass(frozen=True, order=True)
class WellIndex:
    """Zero-based row and one-based column of a well; orders row-major."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if self.row < 0 or self.column < 1:
            raise PlateLayoutError(f"Invalid well position: row={self.row}, column={self.column}")

    @classmethod
    def parse(cls, well_id: str) -> "WellIndex":
        match = _WELL_ID.match(well_id)
        if not match:
            raise PlateLayoutError(f"Invalid well id: {well_id!r}")
        return cls(row=row_to_index(match.group(1)), column=int(match.group(2)))

    @property
    def row_label(self) -> str:
        return index_to_row(self.row)

    def __str__(self) -> str:
        return f"{self.row_label}{self.column}"


@dataclass(frozen=True, eq=False)
class Well:
    """A single well and its readings.

    Wells compare, order and hash by ``index`` only so they can key result
    mappings regardless of the readings they hold.
    """

    index: WellIndex
    readings: Tuple[float, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "readings", tuple(self.readings))

    @classmethod
    def from_id(cls, well_id: str, readings: Iterable[float] = ()) -> "Well":
        return cls(index=WellIndex.parse(well_id), readings=tuple(readings))

    @property
    def id(self) -> str:
        return str(self.index)

    @property
    def row(self) -> int:
        return self.index.row

    @property
    def column(self) -> int:
        return self.index.column

    def size(self) -> int:
        return len(self.readings)

    def window(self, begin: int, length: int) -> "Well":
        """Return a new well holding ``readings[begin:begin + length]``."""
        return Well(index=self.index, readings=self.readings[begin : begin + length])

    def __len__(self) -> int:
        return len(self.readings)

    def __iter__(self) -> Iterator[float]:
        return iter(self.readings)

    def __getitem__(self, item: Union[int, slice]):
        return self.readings[item]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Well):
            return NotImplemented
        return self.index == other.index

    def __lt__(self, other: "Well") -> bool:
        return self.index < other.index

    def __hash__(self) -> int:
        return hash(self.index)

    def __repr__(self) -> str:
        return f"Well({self.id}, n={self.size()})"
