import uuid

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, func
from .database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Usage counters
    projects_polished = Column(Integer, nullable=False, default=0, server_default="0")
    cvs_edited = Column(Integer, nullable=False, default=0, server_default="0")
    cover_letters_generated = Column(Integer, nullable=False, default=0, server_default="0")
    total_tokens_used = Column(BigInteger, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
