"""
CV editor endpoints: structured extraction, completeness checks and export.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from .. import schemas
from ..models.db import user as user_model
from ..models.db.database import get_db
from ..services.cv_extraction_service import check_module_completeness, extract_cv_module
from ..services.document_export_service import export_pdf, export_word
from ..services.llm_service import LLMGateway, get_llm_gateway
from ..services.pdf_exporter import PDF_MEDIA_TYPE
from ..services.user_stats_service import record_usage
from ..services.word_exporter import DOCX_MEDIA_TYPE
from ..utils.api_helpers import handle_service_error, success_response, validate_non_empty_string
from .auth import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/extract-module", summary="Extract Structured CV Module")
def extract_module(
    body: schemas.ExtractModuleRequest,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    validate_non_empty_string(body.raw_text, "Raw text is required")
    try:
        result = extract_cv_module(gateway, body.module_type, body.raw_text, body.language)
    except Exception as e:
        raise handle_service_error(e, "CV extraction")

    record_usage(db, current_user.id, tokens_used=result.tokens_used)
    return success_response(result.model_dump(by_alias=True))


@router.post("/check-completeness", summary="Check CV Module Completeness")
def check_completeness(
    body: schemas.CheckCompletenessRequest,
    current_user: user_model.User = Depends(get_current_user),
):
    completeness = check_module_completeness(body.module_type, body.data, body.language)
    return success_response({
        "completeness": completeness.model_dump(by_alias=True),
        "tokensUsed": 0,
    })


def _export(body: schemas.GenerateDocumentRequest, db: Session, user_id: str, fmt: str) -> Response:
    if not body.modules:
        raise HTTPException(status_code=400, detail="At least one module is required")

    exporter, media_type = (export_word, DOCX_MEDIA_TYPE) if fmt == "docx" else (export_pdf, PDF_MEDIA_TYPE)
    try:
        content = exporter(body.modules, body.language)
    except Exception as e:
        raise handle_service_error(e, "Document export")

    record_usage(db, user_id, cvs_edited=1)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="cv.{fmt}"'},
    )


@router.post("/generate-word", summary="Export CV as Word")
def generate_word(
    body: schemas.GenerateDocumentRequest,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
):
    return _export(body, db, current_user.id, "docx")


@router.post("/generate-pdf", summary="Export CV as PDF")
def generate_pdf(
    body: schemas.GenerateDocumentRequest,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
):
    return _export(body, db, current_user.id, "pdf")


@router.get("/list", summary="List Saved CVs")
def list_cvs(current_user: user_model.User = Depends(get_current_user)):
    # CVs are assembled client-side and never stored
    return success_response([])
