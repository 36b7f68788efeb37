"""
Общие фикстуры тестов хранилища документов.

Каждый тест получает собственную файловую базу SQLite, поэтому хранилища,
сервисы и HTTP-приложение не делят состояние между тестами.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.db import init_models, make_engine, make_session_factory
from app.core.security import create_access_token
from app.domains.identity.entities import User
from app.domains.identity.schemas import UserCreate
from app.domains.repository import Repository

ADMIN_PASSWORD = "adminSecret"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest_asyncio.fixture()
async def engine(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'repository.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def bare_repository(session_factory) -> Repository:
    """Фасад над пустыми коллекциями (без начального заполнения)"""
    return Repository(session_factory)


@pytest_asyncio.fixture()
async def repository(bare_repository) -> Repository:
    await bare_repository.bootstrap(admin_password=ADMIN_PASSWORD)
    return bare_repository


# =============================================================================
# USER FIXTURES
# =============================================================================


@pytest_asyncio.fixture()
async def admin(repository) -> User:
    return await repository.users.get_user_by_name("admin")


@pytest_asyncio.fixture()
async def alice(repository) -> User:
    return await repository.users.create_user(
        UserCreate(name="alice", password="longenough1", email="alice@example.com")
    )


@pytest_asyncio.fixture()
async def bob(repository) -> User:
    return await repository.users.create_user(UserCreate(name="bob", password="longenough2"))


def _bearer(user: User) -> Dict[str, str]:
    token = create_access_token({"sub": user.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers():
    """Заголовок Authorization для пользователя"""
    return _bearer


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest_asyncio.fixture()
async def client(repository):
    from app.main import app

    app.state.repository = repository
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
