from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from . import user as model


def get_user_by_id(db: Session, user_id: str) -> Optional[model.User]:
    return db.query(model.User).filter(model.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[model.User]:
    return db.query(model.User).filter(model.User.email == email).first()


def email_exists(db: Session, email: str) -> bool:
    return db.query(model.User.id).filter(model.User.email == email).first() is not None


def username_exists(db: Session, username: str, exclude_user_id: Optional[str] = None) -> bool:
    query = db.query(model.User.id).filter(model.User.username == username)
    if exclude_user_id is not None:
        query = query.filter(model.User.id != exclude_user_id)
    return query.first() is not None


def create_user(db: Session, email: str, username: str, password_hash: str) -> model.User:
    db_user = model.User(email=email, username=username, password_hash=password_hash)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(
    db: Session,
    db_user: model.User,
    username: Optional[str] = None,
    password_hash: Optional[str] = None,
) -> model.User:
    if username is not None:
        db_user.username = username
    if password_hash is not None:
        db_user.password_hash = password_hash
    db_user.updated_at = func.now()
    db.commit()
    db.refresh(db_user)
    return db_user


def increment_counters(
    db: Session,
    user_id: str,
    projects_polished: int = 0,
    cvs_edited: int = 0,
    cover_letters_generated: int = 0,
    tokens_used: int = 0,
) -> int:
    """Atomically bumps usage counters in a single UPDATE. Returns the matched row count."""
    values = {}
    if projects_polished:
        values[model.User.projects_polished] = model.User.projects_polished + projects_polished
    if cvs_edited:
        values[model.User.cvs_edited] = model.User.cvs_edited + cvs_edited
    if cover_letters_generated:
        values[model.User.cover_letters_generated] = (
            model.User.cover_letters_generated + cover_letters_generated
        )
    if tokens_used > 0:
        values[model.User.total_tokens_used] = model.User.total_tokens_used + tokens_used
    if not values:
        return 0
    values[model.User.updated_at] = func.now()

    matched = (
        db.query(model.User)
        .filter(model.User.id == user_id)
        .update(values, synchronize_session=False)
    )
    db.commit()
    return matched
