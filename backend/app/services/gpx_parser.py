import logging
import re
from pathlib import Path
from typing import List

from app.core.errors import NoValidDataError, ParseError
from app.models.series import Series, bpm_to_rr, positive_number

logger = logging.getLogger(__name__)

# <extensions><gpxtpx:TrackPointExtension><gpxtpx:hr>142</gpxtpx:hr>
TRACKPOINT_HR_PATTERN = re.compile(
    r"<(gpxtpx|ns3):hr>\s*(\d+(?:\.\d+)?)\s*</\1:hr>", re.IGNORECASE
)
HEARTRATE_PATTERN = re.compile(
    r"<heartrate>\s*(\d+(?:\.\d+)?)\s*</heartrate>", re.IGNORECASE
)


def find_heart_rates(content: str) -> List[float]:
    values = [match.group(2) for match in TRACKPOINT_HR_PATTERN.finditer(content)]
    heart_rates = [hr for hr in map(positive_number, values) if hr is not None]
    if heart_rates:
        return heart_rates

    values = [match.group(1) for match in HEARTRATE_PATTERN.finditer(content)]
    return [hr for hr in map(positive_number, values) if hr is not None]


def parse_gpx(file_path: Path) -> Series:
    """Parse heart rate extensions out of a GPX track"""
    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ParseError(f"GPX file parsing error: {e}")

    heart_rates = find_heart_rates(content)
    if not heart_rates:
        raise NoValidDataError(
            "No heart rate data found in GPX file. "
            "GPX file may not contain heart rate extensions."
        )

    logger.debug(f"GPX {file_path.name}: {len(heart_rates)} heart rates")
    return Series(
        heart_rates=heart_rates,
        rr_intervals=[rr for rr in map(bpm_to_rr, heart_rates) if rr is not None],
    )
