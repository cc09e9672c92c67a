import numpy as np
import pytest

from builders import make_plate, make_set, make_well, random_plate, random_set
from plate.well import Well
from stats.descriptive import StandardDeviation
from stats.errors import InsufficientDataError, InvalidParameterError


def test_sample_standard_deviation_of_single_well():
    deviation = StandardDeviation()
    assert deviation.well(make_well("A1", [1, 2, 3])) == pytest.approx(1.0)
    assert deviation.well(make_well("A1", [2, 4, 4, 4, 5, 5, 7, 9])) == pytest.approx(2.138089935)


def test_standard_deviation_is_deterministic():
    well = random_plate("P1", seed=3).first()
    deviation = StandardDeviation()
    assert deviation.well(well) == deviation.well(well)


def test_plate_fan_out_matches_single_well_computation():
    plate = random_plate("P1", seed=4)
    deviation = StandardDeviation()

    per_well = deviation.plate(plate)
    assert len(per_well) == len(plate)
    for well in plate:
        assert per_well[well] == deviation.well(well)
        assert per_well[well] == pytest.approx(np.std(well.readings, ddof=1))


def test_set_fan_out_matches_numpy():
    well_set = random_set("S1", seed=5)
    for well, value in StandardDeviation().set(well_set, 2, 4).items():
        assert value == pytest.approx(np.std(well.readings[2:6], ddof=1))


def test_aggregated_value_differs_from_every_well():
    plate = make_plate("P1", {"A1": [1, 2, 3], "B1": [4, 5, 6]})
    deviation = StandardDeviation()

    aggregated = deviation.plates_aggregated(plate)
    assert aggregated == pytest.approx(np.std([1, 2, 3, 4, 5, 6], ddof=1))
    assert all(aggregated != value for value in deviation.plate(plate).values())


def test_windowed_well_equals_materialised_sub_well():
    well = make_well("A1", [3, 9, 1, 7, 4, 4, 8])
    deviation = StandardDeviation()
    sub_well = Well(index=well.index, readings=well.readings[2:6])
    assert deviation.well(well, 2, 4) == deviation.well(sub_well)
    assert deviation.well(well, 2, 4) == deviation.well(well.window(2, 4))


def test_window_is_applied_per_well_before_pooling():
    well_set = make_set("S1", {"A1": [1, 2, 3, 4, 5, 6], "A2": [10, 20, 30]})
    pooled = StandardDeviation().sets_aggregated(well_set, 1, 2)
    assert pooled == pytest.approx(np.std([2, 3, 20, 30], ddof=1))


def test_aggregated_collections_are_keyed_per_plate():
    plates = [random_plate(f"P{i}", seed=20 + i) for i in range(3)]
    deviation = StandardDeviation()

    results = deviation.plates_aggregated(plates, 1, 5)
    assert list(results) == plates
    for plate in plates:
        pooled = [value for well in plate for value in well.readings[1:6]]
        assert results[plate] == pytest.approx(np.std(pooled, ddof=1))
        assert results[plate] == deviation.plates_aggregated(plate, 1, 5)
    assert deviation.sets_aggregated([plate.data_set() for plate in plates], 1, 5) == {
        plate.data_set(): results[plate] for plate in plates
    }


def test_single_reading_is_insufficient():
    deviation = StandardDeviation()
    with pytest.raises(InsufficientDataError, match="at least 2"):
        deviation.well(make_well("A1", [42]))
    with pytest.raises(InsufficientDataError):
        deviation.well(make_well("A1", [1, 2, 3]), 1, 1)


def test_one_short_well_fails_the_whole_fan_out():
    plate = make_plate("P1", {"A1": [1, 2, 3], "A2": [5]})
    with pytest.raises(InsufficientDataError):
        StandardDeviation().plate(plate)


def test_pooled_readings_satisfy_the_minimum_even_when_wells_do_not():
    plate = make_plate("P1", {"A1": [1], "A2": [5]})
    assert StandardDeviation().plates_aggregated(plate) == pytest.approx(np.std([1, 5], ddof=1))


def test_weights_scale_each_reading_before_reduction():
    deviation = StandardDeviation()
    well = make_well("A1", [1, 2, 3, 4])
    weights = [0.5, 1.0, 2.0, 0.25, 9.0]

    assert deviation.well(well, weights=weights) == pytest.approx(np.std([0.5, 2.0, 6.0, 1.0], ddof=1))
    assert deviation.well(well, 1, 3, weights=weights) == pytest.approx(np.std([1.0, 3.0, 8.0], ddof=1))

    plate = make_plate("P1", {"A1": [1, 2], "A2": [3, 4]})
    assert deviation.plates_aggregated(plate, weights=[2.0, 3.0]) == pytest.approx(np.std([2, 6, 6, 12], ddof=1))


def test_weights_must_cover_every_reading():
    with pytest.raises(InvalidParameterError, match="2 weights"):
        StandardDeviation().well(make_well("A1", [1, 2, 3]), weights=[1.0, 1.0])
