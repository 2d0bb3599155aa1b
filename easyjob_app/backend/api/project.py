import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..models.db import user as user_model
from ..models.db.database import get_db
from ..services.generation_service import polish_project_description
from ..services.llm_service import LLMGateway, get_llm_gateway
from ..services.user_stats_service import record_usage
from ..utils.api_helpers import handle_service_error, success_response, validate_non_empty_string
from .auth import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/polish", summary="Polish Project Description")
def polish_project(
    body: schemas.PolishRequest,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
    gateway: LLMGateway = Depends(get_llm_gateway),
):
    """
    Rewrites a project description into labeled, bullet-pointed form.
    In ``with-job`` mode the text is also tailored to a target job description.
    """
    validate_non_empty_string(body.project_description, "Project description is required")
    with_job = body.mode == schemas.PolishMode.with_job
    if with_job:
        validate_non_empty_string(
            body.target_job_description, 'Target job description is required for "with-job" mode'
        )

    try:
        result = polish_project_description(
            gateway,
            body.project_description,
            target_job_description=body.target_job_description if with_job else None,
            output_language=body.output_language,
            bullet_points=body.bullet_points,
            special_requirements=body.special_requirements,
        )
    except Exception as e:
        raise handle_service_error(e, "Project polish")

    record_usage(db, current_user.id, projects_polished=1, tokens_used=result.tokens_used)
    return success_response(result.content)
