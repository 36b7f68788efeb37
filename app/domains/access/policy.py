"""Правила доступа.

Чистые функции: решение зависит только от записи действующего пользователя
и целевой сущности. Для операций, где возможен и доступ к своему, и доступ
администратора, сначала проверяется доступ к своему; от порядка зависит
только текст причины, но не итоговое решение.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional

from app.core.errors import Forbidden
from app.domains.documents.entities import Document
from app.domains.identity.entities import User
from app.domains.structures.entities import Structure

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: str

    def __bool__(self) -> bool:
        return self.allowed


def _allow(reason: str) -> AccessDecision:
    return AccessDecision(True, reason)


def _deny(reason: str) -> AccessDecision:
    return AccessDecision(False, reason)


def _self_or_admin(actor: User, is_self: bool, denied: str) -> AccessDecision:
    if is_self:
        return _allow("own record")
    if actor.is_admin:
        return _allow("admin override")
    return _deny(denied)


def _admin_only(actor: User, denied: str) -> AccessDecision:
    if actor.is_admin:
        return _allow("admin")
    return _deny(denied)


def _evaluate_user(actor: User, action: Action, target: User) -> AccessDecision:
    if action in (Action.READ, Action.UPDATE):
        return _self_or_admin(
            actor,
            target.id is not None and target.id == actor.id,
            f"Only the user or an admin may {action.value} this user",
        )
    return _admin_only(actor, f"Only an admin may {action.value} users")


def _evaluate_document(actor: User, action: Action, document: Document) -> AccessDecision:
    return _self_or_admin(
        actor,
        document.is_owned_by(actor.id),
        f"Only the owner or an admin may {action.value} this document",
    )


def _evaluate_structure(actor: User, action: Action, structure: Structure) -> AccessDecision:
    if action == Action.READ:
        return _allow("structures are public")
    return _admin_only(actor, f"Only an admin may {action.value} structures")


def evaluate(actor: Optional[User], action: Action, entity: Any) -> AccessDecision:
    """Решение о доступе пользователя actor к сущности entity"""
    if actor is None or actor.id is None:
        return _deny("Authentication required")

    if isinstance(entity, User):
        return _evaluate_user(actor, action, entity)
    if isinstance(entity, Document):
        return _evaluate_document(actor, action, entity)
    if isinstance(entity, Structure):
        return _evaluate_structure(actor, action, entity)

    raise TypeError(f"No access rules for {type(entity).__name__}")


def can_access(actor: Optional[User], action: Action, entity: Any) -> bool:
    return evaluate(actor, action, entity).allowed


def assert_access(actor: Optional[User], action: Action, entity: Any) -> AccessDecision:
    """Проверка доступа; при отказе - Forbidden"""
    decision = evaluate(actor, action, entity)
    if not decision.allowed:
        logger.warning(
            f"Access denied: actor={getattr(actor, 'id', None)} action={action.value} "
            f"entity={type(entity).__name__}({getattr(entity, 'id', None)}): {decision.reason}"
        )
        raise Forbidden(decision.reason)
    return decision


def can_set_admin_flag(actor: Optional[User]) -> bool:
    """Менять признак администратора может только администратор"""
    return actor is not None and actor.is_admin
