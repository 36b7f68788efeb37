from typing import Optional, TYPE_CHECKING

from app.core.errors import Forbidden
from app.domains.identity.entities import User

if TYPE_CHECKING:
    from app.db.repositories.user_repository import UserStore


async def resolve_actor(users: "UserStore", actor_id: Optional[str]) -> User:
    """Загрузка записи действующего пользователя; неизвестный пользователь - Forbidden"""
    if not actor_id:
        raise Forbidden("Authentication required")

    actor = await users.get(actor_id)
    if actor is None:
        raise Forbidden("Unknown actor")

    return actor
