from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass
class Document:
    """Сущность документа домена Documents"""

    owner: str
    title: str
    description: str = ""
    type: int = 0
    sub_type: int = 0
    # произвольная структура, хранилище ее не интерпретирует
    content: Any = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    IMMUTABLE_FIELDS = frozenset({"id", "owner"})

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        """Проверка является ли пользователь владельцем"""
        return user_id is not None and user_id == self.owner

    @classmethod
    def create_document(
        cls,
        owner: str,
        title: str,
        description: str = "",
        type: int = 0,
        sub_type: int = 0,
        content: Any = None
    ) -> "Document":
        """Создание нового документа"""
        return cls(
            owner=owner,
            title=title,
            description=description,
            type=type,
            sub_type=sub_type,
            content=content
        )

    def __repr__(self) -> str:
        return f"Document(id={self.id}, title={self.title}, owner={self.owner})"
