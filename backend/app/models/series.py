import math
from enum import Enum
from pathlib import Path
from pydantic import BaseModel, field_validator
from typing import List, Optional

from app.core.errors import InvalidFileType

MS_PER_MINUTE = 60000.0


def positive_number(value) -> Optional[float]:
    """Return ``value`` as a float if it is a finite number > 0, else None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def bpm_to_rr(heart_rate: float) -> Optional[float]:
    """RR interval (ms) = 60000 / heart rate (bpm); None if that is not finite"""
    return positive_number(MS_PER_MINUTE / heart_rate)


class FileFormat(str, Enum):
    CSV = "csv"
    FIT = "fit"
    GPX = "gpx"

    @classmethod
    def from_filename(cls, file_name: str) -> "FileFormat":
        extension = Path(file_name or "").suffix.lower().lstrip(".")
        try:
            return cls(extension)
        except ValueError:
            raise InvalidFileType()


class RawFile(BaseModel):
    file_name: str
    content: bytes

    @property
    def extension(self) -> str:
        return Path(self.file_name).suffix.lower()

    @property
    def size(self) -> int:
        return len(self.content)


class Series(BaseModel):
    heart_rates: Optional[List[float]] = None
    rr_intervals: List[float]

    @field_validator("heart_rates", "rr_intervals")
    @classmethod
    def check_positive(cls, values):
        if values is None:
            return values
        for value in values:
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"Series values must be finite and > 0, got {value}")
        return values

    @property
    def is_analyzable(self) -> bool:
        return len(self.rr_intervals) >= 2

    @classmethod
    def from_samples(cls, heart_rates: List[float], rr_intervals: List[float]) -> "Series":
        """Build a series, deriving RR from heart rate when no RR was observed"""
        if not rr_intervals and heart_rates:
            rr_intervals = [rr for rr in map(bpm_to_rr, heart_rates) if rr is not None]
        return cls(
            heart_rates=heart_rates if heart_rates else None,
            rr_intervals=rr_intervals,
        )
