from sqlalchemy import Column, String, Boolean

from app.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    name = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
