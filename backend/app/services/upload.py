import logging
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional

from app.core.config import settings
from app.core.errors import FileTooLarge, InsufficientDataError, InvalidFileType
from app.models.analysis import AnalysisResult
from app.models.series import FileFormat, RawFile, Series
from app.services.csv_parser import parse_csv
from app.services.fit_parser import parse_fit
from app.services.gpx_parser import parse_gpx
from app.services.hrv import calculate_additional_metrics, calculate_hrv, classify_status

logger = logging.getLogger(__name__)

PARSERS: Dict[FileFormat, Callable[[Path], Series]] = {
    FileFormat.CSV: parse_csv,
    FileFormat.FIT: parse_fit,
    FileFormat.GPX: parse_gpx,
}


def validate_upload(raw_file: RawFile) -> FileFormat:
    """Reject unsupported extensions and oversized files before any parsing"""
    if raw_file.extension not in settings.allowed_extensions:
        raise InvalidFileType(
            f"Invalid file type. Allowed types: {', '.join(settings.allowed_extensions)}"
        )
    file_format = FileFormat.from_filename(raw_file.file_name)

    if raw_file.size > settings.max_upload_size:
        raise FileTooLarge(f"File size exceeds {settings.max_upload_size_mb}MB limit")
    return file_format


@contextmanager
def temporary_upload(raw_file: RawFile, upload_dir: Optional[str] = None) -> Iterator[Path]:
    """Write the upload to a uniquely named file that is removed on exit"""
    directory = Path(upload_dir or settings.upload_dir)
    directory.mkdir(parents=True, exist_ok=True)

    fd, name = tempfile.mkstemp(prefix="upload_", suffix=raw_file.extension, dir=directory)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(raw_file.content)
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Error deleting temporary file {path}: {e}")


def build_result(file_name: str, series: Series, hrv: float) -> AnalysisResult:
    return AnalysisResult(
        file_name=file_name,
        heart_rates=series.heart_rates,
        rr_intervals=series.rr_intervals,
        hrv=round(hrv, 2),
        status=classify_status(hrv),
        timestamp=datetime.now(timezone.utc),
        data_point_count=len(series.rr_intervals),
        metrics=calculate_additional_metrics(series.rr_intervals),
    )


def analyze(raw_file: RawFile, upload_dir: Optional[str] = None) -> AnalysisResult:
    """
    Parse an uploaded file and compute its HRV

    Blocking; run it off the event loop. The temporary copy of the upload is
    deleted on every exit path.
    """
    file_format = validate_upload(raw_file)
    logger.info(f"Processing file: {raw_file.file_name} ({file_format.value}, {raw_file.size} bytes)")

    with temporary_upload(raw_file, upload_dir) as path:
        series = PARSERS[file_format](path)

        if not series.is_analyzable:
            raise InsufficientDataError()

        hrv = calculate_hrv(series.rr_intervals)
        result = build_result(raw_file.file_name, series, hrv)

    logger.info(f"Successfully processed {raw_file.file_name}. HRV: {result.hrv}, Status: {result.status.value}")
    return result
