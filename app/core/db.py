from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings

# Базовый класс для моделей
Base = declarative_base()


def make_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Создание асинхронного движка"""
    return create_async_engine(database_url, future=True, echo=echo)


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, expire_on_commit=False)


# Асинхронный движок
engine = make_engine(settings.database_url, echo=settings.sql_echo)

# Сессии
SessionLocal = make_session_factory(engine)


async def init_models(bind: AsyncEngine) -> None:
    """Создание таблиц, если их еще нет"""
    # модели должны быть зарегистрированы в Base.metadata
    import app.db.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
