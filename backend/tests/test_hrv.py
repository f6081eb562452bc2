import math
import pytest

from app.core.errors import InsufficientDataError, NoValidDataError
from app.models.analysis import StressStatus
from app.services.hrv import calculate_additional_metrics, calculate_hrv, classify_status


def test_rmssd_of_known_series():
    hrv = calculate_hrv([800, 810, 790, 805])
    # diffs 10, -20, 15 -> mean square 241.667
    assert hrv == pytest.approx(math.sqrt(725 / 3))
    assert round(hrv, 2) == 15.55
    assert classify_status(hrv) == StressStatus.STRESS


def test_constant_intervals_have_zero_hrv():
    assert calculate_hrv([1000.0, 1000.0, 1000.0]) == 0.0


@pytest.mark.parametrize("rr_intervals", [[], [5], (800,)])
def test_fewer_than_two_intervals(rr_intervals):
    with pytest.raises(InsufficientDataError):
        calculate_hrv(rr_intervals)


def test_invalid_entries_are_discarded():
    rr_intervals = [800, None, "abc", float("nan"), float("inf"), -10, 0, True, 810]
    assert calculate_hrv(rr_intervals) == pytest.approx(10.0)


def test_too_few_valid_entries_after_filtering():
    with pytest.raises(InsufficientDataError, match="Insufficient valid RR intervals"):
        calculate_hrv([800, None, -1, 0])


def test_non_sequence_input():
    with pytest.raises(InsufficientDataError):
        calculate_hrv("800,810")


def test_calculation_is_deterministic():
    rr_intervals = [812.5, 790.0, 845.25, 801.0, 799.5]
    assert calculate_hrv(rr_intervals) == calculate_hrv(list(rr_intervals))


@pytest.mark.parametrize(
    "hrv,expected",
    [
        (0.0, StressStatus.STRESS),
        (39.99, StressStatus.STRESS),
        (40.0, StressStatus.NORMAL),
        (55.0, StressStatus.NORMAL),
        (70.0, StressStatus.NORMAL),
        (70.01, StressStatus.RELAXED),
        (120.0, StressStatus.RELAXED),
    ],
)
def test_classification_boundaries(hrv, expected):
    assert classify_status(hrv) == expected


def test_additional_metrics():
    metrics = calculate_additional_metrics([800, 810, 790, 805])
    assert metrics.mean_rr == 801.25
    # population standard deviation: sqrt(218.75 / 4)
    assert metrics.sdnn == 7.4
    assert metrics.min_rr == 790.0
    assert metrics.max_rr == 810.0
    assert metrics.model_dump(by_alias=True) == {
        "meanRR": 801.25,
        "sdnn": 7.4,
        "minRR": 790.0,
        "maxRR": 810.0,
    }


def test_additional_metrics_without_valid_intervals():
    assert calculate_additional_metrics([None, 0, -5]) is None


def test_overflowing_intervals_are_rejected():
    with pytest.raises(NoValidDataError, match="finite HRV"):
        calculate_hrv([1e200, 1e300, 1])


def test_overflowing_metrics_are_rejected():
    with pytest.raises(NoValidDataError, match="finite HRV metrics"):
        calculate_additional_metrics([1e308, 1e308, 1e308])
