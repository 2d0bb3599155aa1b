import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import schemas
from ..models.db import crud, user as user_model
from ..models.db.database import get_db
from ..security import create_access_token, decode_access_token, get_password_hash, verify_password
from ..services.captcha_service import CaptchaStore, get_captcha_store, issue_captcha
from ..utils.api_helpers import success_response
from ..utils.messages import get_message, request_language

logger = logging.getLogger(__name__)

router = APIRouter()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6
BCRYPT_MAX_BYTES = 72

# Missing credentials are reported by get_current_user
bearer_scheme = HTTPBearer(scheme_name="Bearer", auto_error=False)


def _bad_request(key: str, lang: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=get_message(key, lang))


def _unauthorized(key: str, lang: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=get_message(key, lang),
        headers={"WWW-Authenticate": "Bearer"},
    )


def _auth_payload(db_user: user_model.User) -> dict:
    token = create_access_token(user_id=db_user.id, email=db_user.email)
    payload = schemas.AuthPayload(token=token, user=schemas.UserPublic.model_validate(db_user))
    return payload.model_dump(by_alias=True)


def validate_username(username: str, lang: str) -> None:
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise _bad_request("username_length", lang)


def validate_new_password(password: str, lang: str, length_key: str = "password_length") -> None:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise _bad_request(length_key, lang)
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise _bad_request("password_too_long", lang)


@router.get("/captcha", summary="Issue Captcha")
def get_captcha(request: Request, store: CaptchaStore = Depends(get_captcha_store)):
    try:
        challenge = issue_captcha(store)
    except (OSError, ValueError) as e:
        logger.error("Captcha generation failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=get_message("captcha_failed", request_language(request)),
        )
    payload = schemas.CaptchaPayload(captcha_id=challenge.captcha_id, captcha_image=challenge.image)
    return success_response(payload.model_dump(by_alias=True))


@router.post("/register", summary="Register")
def register(
    body: schemas.RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
    store: CaptchaStore = Depends(get_captcha_store),
):
    lang = request_language(request)

    if not all([body.email, body.username, body.password, body.confirm_password,
                body.captcha_id, body.captcha_code]):
        raise _bad_request("fields_required", lang)

    email = body.email.strip()
    username = body.username.strip()
    if not EMAIL_PATTERN.match(email):
        raise _bad_request("invalid_email", lang)
    validate_username(username, lang)
    validate_new_password(body.password, lang)
    if body.password != body.confirm_password:
        raise _bad_request("password_mismatch", lang)

    # The captcha is consumed before any account lookup
    if not store.verify(body.captcha_id, body.captcha_code):
        raise _bad_request("captcha_invalid", lang)

    if crud.email_exists(db, email):
        raise _bad_request("email_taken", lang)
    if crud.username_exists(db, username):
        raise _bad_request("username_taken", lang)

    try:
        db_user = crud.create_user(
            db, email=email, username=username, password_hash=get_password_hash(body.password)
        )
    except IntegrityError:
        # Concurrent registration with the same email or username
        db.rollback()
        logger.warning("Unique constraint hit while registering %s", email)
        if crud.email_exists(db, email):
            raise _bad_request("email_taken", lang)
        raise _bad_request("username_taken", lang)

    logger.info("Registered user %s", db_user.id)
    return success_response(_auth_payload(db_user))


@router.post("/login", summary="Login")
def login(
    body: schemas.LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    store: CaptchaStore = Depends(get_captcha_store),
):
    lang = request_language(request)

    if not all([body.email, body.password, body.captcha_id, body.captcha_code]):
        raise _bad_request("fields_required", lang)

    if not store.verify(body.captcha_id, body.captcha_code):
        raise _bad_request("captcha_invalid", lang)

    db_user = crud.get_user_by_email(db, email=body.email.strip())
    if not db_user or not verify_password(body.password, db_user.password_hash):
        logger.info("Failed login attempt")
        raise _unauthorized("login_failed", lang)

    logger.info("User %s logged in", db_user.id)
    return success_response(_auth_payload(db_user))


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> user_model.User:
    lang = request_language(request)
    if credentials is None or not credentials.credentials:
        raise _unauthorized("token_missing", lang)

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise _unauthorized("token_invalid", lang)

    db_user = crud.get_user_by_id(db, claims["user_id"])
    if db_user is None:
        raise _unauthorized("token_invalid", lang)
    return db_user
