"""
Usage counters shown on the account page.

Counter updates are best-effort: a failed update is logged and rolled back and
never turns a successful generation into an error response.
"""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.db import crud
from ..schemas import UserStats

logger = logging.getLogger(__name__)


def get_user_stats(db: Session, user_id: str) -> Optional[UserStats]:
    db_user = crud.get_user_by_id(db, user_id)
    if db_user is None:
        return None
    return UserStats(
        projects_polished=db_user.projects_polished or 0,
        cvs_edited=db_user.cvs_edited or 0,
        cover_letters_generated=db_user.cover_letters_generated or 0,
        total_tokens_used=int(db_user.total_tokens_used or 0),
    )


def record_usage(
    db: Session,
    user_id: str,
    projects_polished: int = 0,
    cvs_edited: int = 0,
    cover_letters_generated: int = 0,
    tokens_used: int = 0,
) -> None:
    try:
        crud.increment_counters(
            db,
            user_id,
            projects_polished=projects_polished,
            cvs_edited=cvs_edited,
            cover_letters_generated=cover_letters_generated,
            tokens_used=tokens_used,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to update usage counters for user %s: %s", user_id, e)
