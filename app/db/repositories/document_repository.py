from typing import Any, Optional

from sqlalchemy import select

from app.db.models.document import Document as DocumentModel
from app.db.models.user import User as UserModel
from app.db.repositories.base import EntityStore
from app.domains.documents.entities import Document


class DocumentStore(EntityStore[Document]):
    """Хранилище документов"""

    model = DocumentModel
    entity = Document
    collection = "documents"
    immutable_fields = Document.IMMUTABLE_FIELDS
    filterable_fields = frozenset({"id", "owner", "title", "type", "sub_type"})

    async def count_by_owner(self, owner: str) -> int:
        """Подсчет количества документов владельца"""
        return await self.count({"owner": owner})

    async def insert_owned(self, document: Document) -> Optional[Document]:
        """Вставка документа, только если его владелец существует.

        Возвращает None, если пользователь-владелец уже удален.
        """
        owner_exists = select(UserModel.id).where(UserModel.id == document.owner).exists()
        return await self.insert_where(document, owner_exists)

    async def _before_conditional_insert(self, session: Any, entity: Document) -> None:
        # строка владельца не удаляется до фиксации вставки (PostgreSQL)
        await session.execute(
            select(UserModel.id).where(UserModel.id == entity.owner).with_for_update(read=True)
        )
