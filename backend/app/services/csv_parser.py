import logging
import pandas as pd
from pathlib import Path
from typing import List, Optional

from app.core.config import settings
from app.core.errors import NoValidDataError, ParseError
from app.models.series import Series, bpm_to_rr, positive_number

logger = logging.getLogger(__name__)

# Candidate column names, in priority order, compared after strip + lower()
HEART_RATE_COLUMNS = ("heart_rate", "heartrate", "heart rate", "hr", "bpm")
RR_INTERVAL_COLUMNS = ("rr_interval", "rrinterval", "rr interval", "rr", "rr_ms", "ibi")


def match_columns(columns, candidates) -> List[str]:
    """Return the columns matching ``candidates``, ordered by candidate priority"""
    normalized = {column: str(column).strip().lower() for column in columns}
    return [
        column
        for candidate in candidates
        for column, name in normalized.items()
        if name == candidate
    ]


def first_valid(row: dict, columns: List[str]) -> Optional[float]:
    for column in columns:
        value = positive_number(row.get(column))
        if value is not None:
            return value
    return None


def parse_csv(file_path: Path) -> Series:
    """
    Parse a CSV file with heart rate and/or RR interval columns

    Expected formats:
        timestamp,rr_interval
        timestamp,heart_rate
        timestamp,heart_rate,rr_interval
    Rows with a heart rate but no RR interval get RR = 60000 / HR.
    """
    heart_rates: List[float] = []
    rr_intervals: List[float] = []

    try:
        with pd.read_csv(
            file_path,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            # Positional headers; trailing or extra fields on a row are dropped
            index_col=False,
            engine="python",
            chunksize=settings.csv_chunk_size,
        ) as reader:
            for chunk in reader:
                hr_columns = match_columns(chunk.columns, HEART_RATE_COLUMNS)
                rr_columns = match_columns(chunk.columns, RR_INTERVAL_COLUMNS)
                if not hr_columns and not rr_columns:
                    continue

                for row in chunk.to_dict(orient="records"):
                    hr = first_valid(row, hr_columns)
                    rr = first_valid(row, rr_columns)
                    if hr is not None:
                        heart_rates.append(hr)
                    if rr is None and hr is not None:
                        rr = bpm_to_rr(hr)
                    if rr is not None:
                        rr_intervals.append(rr)
    except pd.errors.EmptyDataError:
        raise NoValidDataError("CSV file is empty.")
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise ParseError(f"CSV parsing error: {e}")

    if not heart_rates and not rr_intervals:
        raise NoValidDataError(
            "No valid heart rate or RR interval data found in CSV. "
            "Please check column names (heart_rate, hr, rr_interval, rr)."
        )

    logger.debug(f"CSV {file_path.name}: {len(heart_rates)} heart rates, {len(rr_intervals)} RR intervals")
    return Series.from_samples(heart_rates, rr_intervals)
