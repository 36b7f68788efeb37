from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.security import verify_token

security = HTTPBearer(auto_error=False)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_optional_actor_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Идентификатор пользователя из токена, если токен передан"""
    if credentials is None:
        return None

    payload = verify_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise _credentials_exception()

    return str(payload["sub"])


async def get_current_actor_id(actor_id: Optional[str] = Depends(get_optional_actor_id)) -> str:
    """Зависимость для маршрутов, требующих авторизации"""
    if actor_id is None:
        raise _credentials_exception()
    return actor_id
