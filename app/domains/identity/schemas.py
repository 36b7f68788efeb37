from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from typing import Optional
from datetime import datetime

from app.core.security import BCRYPT_MAX_BYTES, password_fits


def _validate_name(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError('Name cannot be empty')
    return v.strip() if v else v


def _validate_password(v: Optional[str]) -> Optional[str]:
    if v is not None and not password_fits(v):
        raise ValueError(f"Password cannot be longer than {BCRYPT_MAX_BYTES} bytes")
    return v


class UserCreate(BaseModel):
    """Схема для создания пользователя (userCreation)"""
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8, max_length=72)
    email: Optional[EmailStr] = None
    is_admin: bool = Field(False, alias="isAdmin")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _validate_name(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _validate_password(v)


class UserLogin(BaseModel):
    """Схема для входа пользователя (userLogin)"""
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Схема для обновления пользователя (userUpdate)"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=8, max_length=72)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = Field(None, alias="isAdmin")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _validate_name(v)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _validate_password(v)


class UserResponse(BaseModel):
    """Схема для ответа с данными пользователя"""
    id: str
    name: str
    email: Optional[str] = None
    is_admin: bool = Field(alias="isAdmin")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class LoginResponse(BaseModel):
    """Ответ на вход: токен и признак администратора"""
    token: str
    is_admin: bool = Field(alias="isAdmin")

    model_config = ConfigDict(populate_by_name=True)
