from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Any, Dict, List, Optional
from datetime import datetime


class StructureField(BaseModel):
    """Описание поля структуры: имя и тип. Дополнительные ключи сохраняются как есть"""
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=100)

    model_config = ConfigDict(extra="allow")


class StructureCreate(BaseModel):
    """Схема для создания структуры (structureCreation)"""
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=10000)
    reference: Any = None
    fields: List[StructureField] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip()


class StructureUpdate(BaseModel):
    """Схема для обновления структуры (structureUpdate)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=10000)
    reference: Any = None
    fields: Optional[List[StructureField]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Name cannot be empty')
        return v.strip() if v else v

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class StructureResponse(BaseModel):
    """Схема для ответа с данными структуры"""
    id: str
    name: str
    description: str = ""
    reference: Any = None
    fields: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
