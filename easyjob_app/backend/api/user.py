"""
Account page endpoints: profile, usage statistics and profile updates.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import schemas
from ..models.db import crud, user as user_model
from ..models.db.database import get_db
from ..security import get_password_hash, verify_password
from ..services.user_stats_service import get_user_stats
from ..utils.api_helpers import check_resource_exists, success_response
from ..utils.messages import get_message, request_language
from .auth import get_current_user, validate_new_password, validate_username

logger = logging.getLogger(__name__)
router = APIRouter()


def _user_profile(db_user: user_model.User) -> dict:
    profile = schemas.UserPublic.model_validate(db_user).model_dump(by_alias=True)
    profile["createdAt"] = db_user.created_at.isoformat() if db_user.created_at else None
    return profile


@router.get("/me", summary="Current User and Usage Stats")
def read_me(
    request: Request,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
):
    stats = get_user_stats(db, current_user.id)
    check_resource_exists(stats, get_message("user_not_found", request_language(request)))
    return success_response({
        "user": _user_profile(current_user),
        "stats": stats.model_dump(by_alias=True),
    })


@router.put("/me", summary="Update Username or Password")
def update_me(
    body: schemas.UpdateUserRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user),
):
    lang = request_language(request)

    if not body.username and not body.password and not body.new_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=get_message("nothing_to_update", lang))

    new_username = None
    if body.username is not None:
        new_username = body.username.strip()
        validate_username(new_username, lang)
        if crud.username_exists(db, new_username, exclude_user_id=current_user.id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=get_message("username_taken", lang))

    new_hash = None
    if body.new_password is not None:
        if not body.password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=get_message("current_password_required", lang)
            )
        validate_new_password(body.new_password, lang, length_key="new_password_length")
        if not verify_password(body.password, current_user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=get_message("current_password_wrong", lang)
            )
        new_hash = get_password_hash(body.new_password)

    try:
        db_user = crud.update_user(db, current_user, username=new_username, password_hash=new_hash)
    except IntegrityError:
        # Another account claimed the username in the meantime
        db.rollback()
        logger.warning("Unique constraint hit while renaming user %s", current_user.id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=get_message("username_taken", lang))

    logger.info("Updated profile of user %s (username=%s, password=%s)",
                db_user.id, new_username is not None, new_hash is not None)
    return success_response({"user": _user_profile(db_user)})
