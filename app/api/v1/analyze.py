import logging
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from app.core.config import settings
from app.core.rate_limit import upload_rate_limit
from app.schemas.analysis import AnalysisResult, ErrorResponse
from app.services.analysis_service import AnalysisResolver

router = APIRouter()
legacy_router = APIRouter(include_in_schema=False)
logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
UPLOAD_CHUNK_BYTES = 64 * 1024
MAX_UPLOAD_BYTES = settings.max_upload_bytes

_ANALYZE_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {"model": AnalysisResult},
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
}


@lru_cache(maxsize=1)
def get_analysis_resolver() -> AnalysisResolver:
    return AnalysisResolver.from_settings(settings)


def _is_pdf(upload: UploadFile) -> bool:
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    return content_type == PDF_CONTENT_TYPE


async def _read_limited(upload: UploadFile, limit: int) -> int:
    total = 0
    while True:
        chunk = await upload.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum allowed size is {limit // (1024 * 1024)} MB.",
            )
    return total


@router.post("/analyze", responses=_ANALYZE_RESPONSES)
@upload_rate_limit()
async def analyze_resume(
    request: Request,
    resume: UploadFile | None = File(default=None),
    resolver: AnalysisResolver = Depends(get_analysis_resolver),
):
    _ = request
    if resume is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")
    if not _is_pdf(resume):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only PDF files are allowed")

    size = await _read_limited(resume, MAX_UPLOAD_BYTES)
    filename = resume.filename or "resume.pdf"
    logger.info("resume_uploaded file=%s bytes=%s", filename, size)

    return await resolver.resolve(filename)


legacy_router.add_api_route("/analyze", analyze_resume, methods=["POST"])
