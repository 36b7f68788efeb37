"""Ошибки хранилища документов.

Все ошибки, которые сервисы и хранилище отдают наружу, наследуются от
RepositoryError. HTTP-слой сопоставляет их с кодами ответа.
"""
from typing import Iterable, Optional


class RepositoryError(Exception):
    """Базовая ошибка хранилища"""

    code = "repository_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class ValidationError(RepositoryError):
    """Некорректные или отсутствующие поля"""

    code = "validation_error"


class DuplicateKey(RepositoryError):
    """Нарушение уникальности"""

    code = "duplicate_key"

    def __init__(self, collection: str, field: Optional[str] = None, value: Optional[str] = None):
        if field and value is not None:
            message = f"{collection}: {field} '{value}' already exists"
        elif field:
            message = f"{collection}: {field} must be unique"
        else:
            message = f"{collection}: unique constraint violated"
        super().__init__(message)
        self.collection = collection
        self.field = field
        self.value = value


class NotFound(RepositoryError):
    """Сущность не найдена"""

    code = "not_found"

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        if entity_id is not None:
            message = f"{entity} '{entity_id}' not found"
        else:
            message = f"{entity} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class Forbidden(RepositoryError):
    """Правила доступа запрещают операцию"""

    code = "forbidden"


class ImmutableFieldViolation(RepositoryError):
    """Попытка изменить неизменяемое поле (id, owner)"""

    code = "immutable_field"

    def __init__(self, fields: Iterable[str]):
        self.fields = sorted(fields)
        super().__init__(f"Fields cannot be changed: {', '.join(self.fields)}")


ForbiddenFieldUpdate = ImmutableFieldViolation


class StorageFault(RepositoryError):
    """Ошибка ввода-вывода в хранилище"""

    code = "storage_fault"


class AuthenticationFailed(RepositoryError):
    """Неверное имя пользователя или пароль"""

    code = "authentication_failed"


class ReferentialConflict(RepositoryError):
    """Операция нарушила бы ссылки между сущностями"""

    code = "referential_conflict"
