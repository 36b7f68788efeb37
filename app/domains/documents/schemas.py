from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Any, Dict, Optional
from datetime import datetime


class DocumentCreate(BaseModel):
    """Схема для создания документа (documentCreation). Владелец всегда - автор запроса"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=10000)
    type: int = 0
    sub_type: int = Field(0, alias="subType")
    content: Any = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()


class DocumentUpdate(BaseModel):
    """Схема для обновления документа (documentUpdate).

    Поля id и owner принимаются, чтобы сервис мог отклонить запрос целиком:
    они не меняются.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=10000)
    type: Optional[int] = None
    sub_type: Optional[int] = Field(None, alias="subType")
    content: Any = None
    id: Optional[str] = None
    owner: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip() if v else v

    def changes(self) -> Dict[str, Any]:
        """Только переданные в запросе поля"""
        return self.model_dump(exclude_unset=True)


class DocumentQuery(BaseModel):
    """Фильтр списка документов"""
    title: Optional[str] = None
    type: Optional[int] = None
    sub_type: Optional[int] = Field(None, alias="subType")
    owner: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    def to_filter(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class DocumentResponse(BaseModel):
    """Схема для ответа с данными документа"""
    id: str
    owner: str
    title: str
    description: str = ""
    type: int = 0
    sub_type: int = Field(0, alias="subType")
    content: Any = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
