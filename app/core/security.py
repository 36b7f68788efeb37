from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings

# bcrypt учитывает только первые 72 байта; более длинные пароли не хешируются
BCRYPT_MAX_BYTES = 72

# Контекст для хеширования паролей
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
    bcrypt__truncate_error=True,
)


def password_fits(password: str) -> bool:
    return len(password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    if not password_fits(plain_password):
        return False
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Проверка впустую, чтобы время ответа не зависело от наличия пользователя"""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """Хеширование пароля; пароль длиннее 72 байт отклоняется (PasswordSizeError)"""
    return pwd_context.hash(password)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Создание JWT токена доступа"""
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Проверка JWT токена и извлечение данных"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None
