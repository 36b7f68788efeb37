from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.core.security import get_password_hash, verify_password

MIN_PASSWORD_LENGTH = 8


@dataclass
class User:
    """Сущность пользователя домена Identity"""

    name: str
    password_hash: str
    email: Optional[str] = None
    is_admin: bool = False
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)

    @classmethod
    def create_user(
        cls,
        name: str,
        password: str,
        email: Optional[str] = None,
        is_admin: bool = False
    ) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            name=name,
            password_hash=get_password_hash(password),
            email=email,
            is_admin=is_admin
        )

    def __repr__(self) -> str:
        return f"User(id={self.id}, name={self.name}, is_admin={self.is_admin})"
