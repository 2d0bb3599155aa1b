import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..models.db import user as user_model
from ..models.db.database import get_db
from ..services.generation_service import generate_cover_letter, modify_cover_letter
from ..services.llm_service import LLMGateway, get_llm_gateway
from ..services.user_stats_service import record_usage
from ..utils.api_helpers import handle_service_error, success_response, validate_non_empty_string
from .auth import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()

MISSING_RESUME_CONTENT = "No resume content provided."


@router.post("/generate", summary="Generate Cover Letter")
def generate(
    body: schemas.CoverLetterRequest,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    validate_non_empty_string(body.job_description, "Job description is required")

    try:
        result = generate_cover_letter(
            gateway,
            job_description=body.job_description.strip(),
            resume_content=body.resume_content or MISSING_RESUME_CONTENT,
            language=body.language,
            special_requirements=body.special_requirements.strip() if body.special_requirements else None,
        )
    except Exception as e:
        raise handle_service_error(e, "Cover letter generation")

    record_usage(db, current_user.id, cover_letters_generated=1, tokens_used=result.tokens_used)
    return success_response(result.content)


@router.post("/modify", summary="Modify Cover Letter")
def modify(
    body: schemas.ModifyCoverLetterRequest,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    validate_non_empty_string(body.job_description, "Job description is required")
    validate_non_empty_string(body.current_cover_letter, "Current cover letter is required")
    validate_non_empty_string(body.modification_requirement, "Modification requirement is required")

    try:
        result = modify_cover_letter(
            gateway,
            job_description=body.job_description.strip(),
            resume_content=body.resume_content or MISSING_RESUME_CONTENT,
            current_cover_letter=body.current_cover_letter.strip(),
            modification_requirement=body.modification_requirement.strip(),
            language=body.language,
        )
    except Exception as e:
        raise handle_service_error(e, "Cover letter modification")

    # A modification counts as another generated letter
    record_usage(db, current_user.id, cover_letters_generated=1, tokens_used=result.tokens_used)
    return success_response(result.content)
