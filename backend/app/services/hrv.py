"""
HRV calculation using RMSSD (Root Mean Square of Successive Differences):

    HRV = sqrt( sum( (RR[i] - RR[i-1])^2 ) / (n-1) )

HRV interpretation:
    HRV > 70 ms       Relaxed  (good recovery, low stress)
    40 <= HRV <= 70   Normal
    HRV < 40 ms       Stress   (high stress, poor recovery)
"""

import math
import numbers
import numpy as np
from typing import Optional, Sequence

from app.core.errors import InsufficientDataError, NoValidDataError
from app.models.analysis import HRVMetrics, StressStatus
from app.models.series import positive_number

RELAXED_THRESHOLD = 70.0
NORMAL_THRESHOLD = 40.0


def valid_intervals(rr_intervals: Sequence) -> np.ndarray:
    """Drop null, non-numeric, non-finite and non-positive entries"""
    values = [
        positive_number(value)
        for value in rr_intervals
        if isinstance(value, numbers.Real) and not isinstance(value, bool)
    ]
    return np.array([value for value in values if value is not None], dtype=float)


def calculate_hrv(rr_intervals: Sequence) -> float:
    """
    Calculate HRV (RMSSD) from RR intervals in milliseconds

    Raises:
        InsufficientDataError: fewer than 2 valid intervals
        NoValidDataError: intervals so large the result overflows
    """
    if not isinstance(rr_intervals, (list, tuple, np.ndarray)) or len(rr_intervals) < 2:
        raise InsufficientDataError("At least 2 RR intervals are required for HRV calculation")

    intervals = valid_intervals(rr_intervals)
    if len(intervals) < 2:
        raise InsufficientDataError("Insufficient valid RR intervals for HRV calculation")

    with np.errstate(over="ignore", invalid="ignore"):
        hrv = float(np.sqrt(np.mean(np.diff(intervals) ** 2)))
    if not math.isfinite(hrv):
        raise NoValidDataError("RR intervals are too large to compute a finite HRV")
    return hrv


def calculate_additional_metrics(rr_intervals: Sequence) -> Optional[HRVMetrics]:
    """Mean RR, SDNN (population standard deviation), min and max RR"""
    intervals = valid_intervals(rr_intervals)
    if len(intervals) == 0:
        return None

    with np.errstate(over="ignore", invalid="ignore"):
        values = [
            float(np.mean(intervals)),
            float(np.std(intervals)),
            float(np.min(intervals)),
            float(np.max(intervals)),
        ]
    if not all(math.isfinite(value) for value in values):
        raise NoValidDataError("RR intervals are too large to compute finite HRV metrics")

    mean_rr, sdnn, min_rr, max_rr = (round(value, 2) for value in values)
    return HRVMetrics(mean_rr=mean_rr, sdnn=sdnn, min_rr=min_rr, max_rr=max_rr)


def classify_status(hrv: float) -> StressStatus:
    # 70 itself is Normal, 40 itself is Normal
    if hrv > RELAXED_THRESHOLD:
        return StressStatus.RELAXED
    if hrv >= NORMAL_THRESHOLD:
        return StressStatus.NORMAL
    return StressStatus.STRESS
