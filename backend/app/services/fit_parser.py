import logging
from fitparse import FitFile, FitParseError
from pathlib import Path
from pydantic import BaseModel
from typing import Any, Dict, List

from app.core.errors import NoValidDataError, ParseError
from app.models.series import Series, bpm_to_rr, positive_number

logger = logging.getLogger(__name__)


class FitActivity(BaseModel):
    """Decoded FIT content: per-sample records and session summaries"""
    records: List[Dict[str, Any]] = []
    sessions: List[Dict[str, Any]] = []


def decode_fit(file_path: Path) -> FitActivity:
    """
    Decode a FIT file with fitparse

    ``record`` messages are kept as-is. ``hrv`` messages hold beat-to-beat
    intervals in seconds; they become records carrying only ``rr`` in ms,
    in file order.
    """
    activity = FitActivity()

    with open(file_path, "rb") as f:
        fitfile = FitFile(f)
        for message in fitfile.get_messages():
            if message.name == "record":
                activity.records.append(message.get_values())
            elif message.name == "hrv":
                times = message.get_values().get("time")
                if times is None:
                    continue
                if not isinstance(times, (list, tuple)):
                    times = [times]
                activity.records.append({"rr": [t * 1000 for t in times if t is not None]})
            elif message.name == "session":
                activity.sessions.append(message.get_values())

    return activity


def direct_rr_values(rr) -> List[float]:
    """A record's ``rr`` may be a scalar or an array"""
    if rr is None:
        return []
    if not isinstance(rr, (list, tuple)):
        rr = [rr]
    return [value for value in map(positive_number, rr) if value is not None]


def parse_fit(file_path: Path) -> Series:
    """
    Parse heart rate and RR intervals from a FIT activity file

    A record's heart rate is always kept; its derived RR (60000 / HR) is only
    used when the same record carries no direct RR value.
    """
    try:
        activity = decode_fit(file_path)
    except (FitParseError, ValueError, OSError) as e:
        raise ParseError(f"FIT file parsing error: {e}")

    heart_rates: List[float] = []
    rr_intervals: List[float] = []

    for record in activity.records:
        hr = positive_number(record.get("heart_rate"))
        rr = direct_rr_values(record.get("rr"))
        if hr is not None:
            heart_rates.append(hr)
        if not rr and hr is not None:
            rr = direct_rr_values(bpm_to_rr(hr))
        rr_intervals.extend(rr)

    # Session averages are coarser samples; record-level data already covers RR
    for session in activity.sessions:
        avg_hr = positive_number(session.get("avg_heart_rate"))
        if avg_hr is not None:
            heart_rates.append(avg_hr)

    if not heart_rates and not rr_intervals:
        raise NoValidDataError("No heart rate or RR interval data found in FIT file.")

    logger.debug(f"FIT {file_path.name}: {len(heart_rates)} heart rates, {len(rr_intervals)} RR intervals")
    return Series.from_samples(heart_rates, rr_intervals)
