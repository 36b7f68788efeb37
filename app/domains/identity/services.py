import logging
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from app.core.errors import (
    AuthenticationFailed, Forbidden, NotFound, ReferentialConflict, ValidationError
)
from app.core.security import (
    BCRYPT_MAX_BYTES, create_access_token, dummy_verify, get_password_hash, password_fits
)
from app.domains.access import Action, assert_access, can_set_admin_flag, resolve_actor
from app.domains.identity.entities import MIN_PASSWORD_LENGTH, User
from app.domains.identity.schemas import UserCreate, UserUpdate

if TYPE_CHECKING:
    from app.db.repositories.document_repository import DocumentStore
    from app.db.repositories.user_repository import UserStore

logger = logging.getLogger(__name__)

REMOVAL_POLICIES = ("forbid", "orphan")


def _check_password(password: Optional[str]) -> None:
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not password_fits(password):
        raise ValidationError(f"Password cannot be longer than {BCRYPT_MAX_BYTES} bytes")


def _check_name(name: Optional[str]) -> None:
    if name is None or not name.strip():
        raise ValidationError("User must have a name")


class IdentityService:
    """Сервис для работы с пользователями и аутентификацией"""

    def __init__(
        self,
        users: "UserStore",
        documents: "DocumentStore",
        removal_policy: str = "forbid"
    ):
        if removal_policy not in REMOVAL_POLICIES:
            raise ValueError(f"Unknown user removal policy: {removal_policy}")
        self.users = users
        self.documents = documents
        self.removal_policy = removal_policy

    async def _get_or_404(self, user_id: str) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise NotFound("User", user_id)
        return user

    async def list_users(self, actor_id: Optional[str]) -> List[User]:
        """Администратор видит всех, остальные - только себя"""
        actor = await resolve_actor(self.users, actor_id)
        if actor.is_admin:
            return await self.users.query()
        return [actor]

    async def get_user(self, user_id: str, actor_id: Optional[str]) -> User:
        actor = await resolve_actor(self.users, actor_id)
        user = await self._get_or_404(user_id)
        assert_access(actor, Action.READ, user)
        return user

    async def get_current_user(self, actor_id: str) -> User:
        """Владелец токена; удаленная учетная запись - ошибка аутентификации"""
        user = await self.users.get(actor_id)
        if user is None:
            raise AuthenticationFailed("Account no longer exists")
        return user

    async def get_user_by_name(self, name: str) -> User:
        """Получение пользователя по имени, без проверки доступа (используется при входе)"""
        user = await self.users.get_by_name(name)
        if user is None:
            raise NotFound("User", name)
        return user

    async def authenticate(self, name: str, password: str) -> User:
        """Проверка имени и пароля"""
        try:
            user = await self.get_user_by_name(name)
        except NotFound:
            dummy_verify()
            raise AuthenticationFailed("Incorrect name or password")

        if not user.authenticate(password):
            raise AuthenticationFailed("Incorrect name or password")

        return user

    async def login_user(self, name: str, password: str) -> Tuple[str, User]:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate(name, password)
        token = create_access_token(data={"sub": user.id})
        logger.info(f"User {user.name} logged in")
        return token, user

    async def create_user(self, user_data: UserCreate, actor_id: Optional[str] = None) -> User:
        """Регистрация нового пользователя.

        Регистрация открыта, но создать администратора может только администратор.
        """
        _check_name(user_data.name)
        _check_password(user_data.password)

        if user_data.is_admin:
            actor = await resolve_actor(self.users, actor_id) if actor_id else None
            if not can_set_admin_flag(actor):
                raise Forbidden("Only an admin may create admin users")

        user = User.create_user(
            name=user_data.name,
            password=user_data.password,
            email=user_data.email,
            is_admin=user_data.is_admin
        )
        created = await self.users.insert(user)
        logger.info(f"Created user {created.name} ({created.id})")
        return created

    async def update_user(
        self,
        user_id: str,
        update_data: UserUpdate,
        actor_id: Optional[str]
    ) -> User:
        """Обновление пользователя: сам пользователь или администратор"""
        actor = await resolve_actor(self.users, actor_id)
        user = await self._get_or_404(user_id)
        assert_access(actor, Action.UPDATE, user)

        changes: Dict[str, Any] = update_data.model_dump(exclude_unset=True)

        if "is_admin" in changes:
            if not can_set_admin_flag(actor):
                raise Forbidden("Only an admin may change admin status")
            if changes["is_admin"] is None:
                raise ValidationError("isAdmin cannot be null")

        if "name" in changes:
            _check_name(changes["name"])

        if "password" in changes:
            _check_password(changes["password"])
            changes["password_hash"] = get_password_hash(changes.pop("password"))

        if await self.users.update(user_id, changes) == 0:
            raise NotFound("User", user_id)

        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return await self._get_or_404(user_id)

    async def remove_user(self, user_id: str, actor_id: Optional[str]) -> None:
        """Удаление пользователя (только администратор).

        При политике forbid проверка документов и удаление выполняются одной
        инструкцией хранилища.
        """
        actor = await resolve_actor(self.users, actor_id)
        user = await self._get_or_404(user_id)
        assert_access(actor, Action.REMOVE, user)

        if self.removal_policy == "forbid":
            if await self.users.remove_unreferenced(user_id) == 0:
                if await self.users.get(user_id) is None:
                    raise NotFound("User", user_id)
                owned = await self.documents.count_by_owner(user_id)
                raise ReferentialConflict(f"User '{user_id}' still owns {owned} document(s)")
            logger.info(f"Removed user {user_id}")
            return

        owned = await self.documents.count_by_owner(user_id)
        if await self.users.remove({"id": user_id}) == 0:
            raise NotFound("User", user_id)

        if owned:
            logger.warning(f"Removed user {user_id}; {owned} document(s) left without an owner")
        else:
            logger.info(f"Removed user {user_id}")
