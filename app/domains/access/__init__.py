from app.domains.access.policy import (
    Action, AccessDecision, evaluate, can_access, assert_access, can_set_admin_flag
)
from app.domains.access.actors import resolve_actor

__all__ = [
    "Action", "AccessDecision",
    "evaluate", "can_access", "assert_access", "can_set_admin_flag",
    "resolve_actor"
]
