"""Builders for wells, sets and plates used across the test modules."""
from typing import Dict, Iterable, Sequence

import numpy as np

from plate.plate import Plate
from plate.well import Well, index_to_row
from plate.wellset import WellSet


def make_well(well_id: str, readings: Iterable[float]) -> Well:
    return Well.from_id(well_id, readings)


def make_wells(readings_by_id: Dict[str, Sequence[float]]):
    return [make_well(well_id, readings) for well_id, readings in readings_by_id.items()]


def make_plate(label: str, readings_by_id: Dict[str, Sequence[float]], rows: int = 2, columns: int = 3) -> Plate:
    return Plate(rows, columns, label=label, wells=make_wells(readings_by_id))


def make_set(label: str, readings_by_id: Dict[str, Sequence[float]]) -> WellSet:
    return WellSet(make_wells(readings_by_id), label=label)


def random_plate(label: str, seed: int, rows: int = 4, columns: int = 6, length: int = 8) -> Plate:
    rng = np.random.default_rng(seed)
    wells = [
        make_well(f"{index_to_row(row)}{column}", rng.integers(1, 1000, size=length).tolist())
        for row in range(rows)
        for column in range(1, columns + 1)
    ]
    return Plate(rows, columns, label=label, wells=wells)


def random_set(label: str, seed: int, wells: int = 10, length: int = 8) -> WellSet:
    plate = random_plate(label, seed, rows=1, columns=wells, length=length)
    return WellSet(plate.wells(), label=label)
