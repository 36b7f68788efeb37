from fastapi import Request

from app.domains.repository import Repository


def get_repository(request: Request) -> Repository:
    """Фасад хранилища, созданный при запуске приложения"""
    return request.app.state.repository
