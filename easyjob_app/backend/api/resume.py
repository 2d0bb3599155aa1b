import logging
import os
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from ..config.settings import get_settings
from ..utils.api_helpers import handle_service_error, success_response
from ..utils.cv_utils import extract_resume_text

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/extract-text", summary="Extract Text from an Uploaded Resume")
async def extract_text(resume_file: Optional[UploadFile] = File(None, alias="resumeFile")):
    """
    Returns the plain text of a PDF or DOCX resume so the client can feed it
    into the cover letter form.
    """
    settings = get_settings()
    if resume_file is None or not resume_file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    extension = os.path.splitext(resume_file.filename)[1].lower()
    if extension not in settings.allowed_resume_extensions:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Please upload a PDF or Word document.",
        )

    contents = await resume_file.read(settings.max_file_size + 1)
    if len(contents) > settings.max_file_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size is {settings.max_file_size // (1024 * 1024)} MB.",
        )
    logger.info("Received resume '%s' (%d bytes)", resume_file.filename, len(contents))

    try:
        text = await run_in_threadpool(extract_resume_text, contents, resume_file.filename)
    except Exception as e:
        raise handle_service_error(e, "Resume text extraction")

    return success_response({"text": text, "filename": resume_file.filename})
