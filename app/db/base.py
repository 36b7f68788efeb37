import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from app.core.db import Base


def generate_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Общие колонки для всех коллекций"""
    __abstract__ = True

    id = Column(String(32), primary_key=True, default=generate_id)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
