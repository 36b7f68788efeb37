import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import (
    AuthenticationFailed, DuplicateKey, Forbidden, ImmutableFieldViolation, NotFound,
    ReferentialConflict, RepositoryError, StorageFault, ValidationError
)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ImmutableFieldViolation: status.HTTP_400_BAD_REQUEST,
    AuthenticationFailed: status.HTTP_401_UNAUTHORIZED,
    Forbidden: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateKey: status.HTTP_409_CONFLICT,
    ReferentialConflict: status.HTTP_409_CONFLICT,
    StorageFault: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(error: RepositoryError) -> int:
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Ошибки хранилища в HTTP-ответ"""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")

    headers = None
    if isinstance(exc, AuthenticationFailed):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": exc.message},
        headers=headers,
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Ошибки валидации запроса - 400"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": ValidationError.code, "detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
