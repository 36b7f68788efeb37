from typing import List, Optional

from sqlalchemy import delete, select

from app.db.models.document import Document as DocumentModel
from app.db.models.user import User as UserModel
from app.db.repositories.base import EntityStore
from app.domains.identity.entities import User


class UserStore(EntityStore[User]):
    """Хранилище пользователей"""

    model = UserModel
    entity = User
    collection = "users"
    unique_fields = ("name",)
    filterable_fields = frozenset({"id", "name", "email", "is_admin"})

    async def get_by_name(self, name: str) -> Optional[User]:
        """Получение пользователя по имени"""
        found = await self.query({"name": name})
        return found[0] if found else None

    async def list_admins(self) -> List[User]:
        return await self.query({"is_admin": True})

    async def remove_unreferenced(self, user_id: str) -> int:
        """Удаление пользователя, у которого нет документов.

        Наличие документов проверяет та же инструкция DELETE, поэтому документ,
        созданный параллельно, не останется без владельца. Возвращает 0, если
        пользователь не найден или владеет документами.
        """
        owns_documents = select(DocumentModel.id).where(DocumentModel.owner == user_id).exists()
        stmt = delete(UserModel.__table__).where(UserModel.id == user_id, ~owns_documents)

        async with self._write_lock:
            async with self._transaction() as session:
                # ждем завершения вставок, заблокировавших строку владельца (PostgreSQL)
                await session.execute(
                    select(UserModel.id).where(UserModel.id == user_id).with_for_update()
                )
                result = await session.execute(stmt)
                return result.rowcount
