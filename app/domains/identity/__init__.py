from app.domains.identity.entities import User
from app.domains.identity.schemas import (
    UserCreate, UserLogin, UserUpdate, UserResponse, LoginResponse
)

__all__ = [
    "User",
    "UserCreate", "UserLogin", "UserUpdate", "UserResponse", "LoginResponse"
]
