from fastapi import APIRouter, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from app.core.config import settings
from app.core.errors import AnalysisError, NoFileUploaded, UnexpectedServerError
from app.models.analysis import AnalysisResult, ErrorResponse
from app.models.series import RawFile
from app.services.upload import analyze

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post(
    "/upload",
    response_model=AnalysisResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_file(file: Optional[UploadFile] = File(None)):
    """
    Upload a .csv, .fit or .gpx file with heart rate/RR data

    Returns the RMSSD-based HRV and the matching stress status
    """
    try:
        if file is None or not file.filename:
            raise NoFileUploaded()

        # One byte past the limit is enough to reject without buffering it all
        content = await file.read(settings.max_upload_size + 1)
        raw_file = RawFile(file_name=file.filename, content=content)

        return await run_in_threadpool(analyze, raw_file)
    except AnalysisError as e:
        logger.warning(f"Upload rejected ({e.error}): {e.message}")
        return JSONResponse(status_code=e.status_code, content=e.to_dict())
    except Exception as e:
        logger.exception(f"Error processing file: {e}")
        error = UnexpectedServerError(str(e))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())
    finally:
        if file is not None:
            await file.close()
