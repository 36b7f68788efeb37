import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse

from app.api.http import (
    auth_router, documents_router, health_router, structures_router, users_router
)
from app.api.http.errors import register_exception_handlers
from app.core.config import settings
from app.core.db import SessionLocal, engine, init_models
from app.core.logging import configure_logging
from app.db.compaction import CompactionScheduler
from app.domains.repository import Repository

logger = logging.getLogger(__name__)

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)

    if settings.auto_create_schema:
        await init_models(engine)

    repository = Repository(SessionLocal, user_removal_policy=settings.user_removal_policy)
    await repository.bootstrap(settings.default_admin_name, settings.default_admin_password)
    app.state.repository = repository

    scheduler = CompactionScheduler(repository.stores, settings.compaction_interval_seconds)
    scheduler.start()
    logger.info("Document repository started")

    try:
        yield
    finally:
        await scheduler.stop()
        await engine.dispose()


app = FastAPI(
    title="DocRepository",
    description="Хранилище структурированных документов с разграничением доступа",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Подключаем статические файлы, если собран frontend
if os.path.exists(STATIC_DIR):
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Подключаем роутеры
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(documents_router)
app.include_router(structures_router)


@app.get("/")
async def root():
    """Корневой эндпоинт - отдаем главную страницу"""
    index = os.path.join(STATIC_DIR, "index.html")
    if os.path.exists(index):
        return FileResponse(index)
    return {
        "message": "DocRepository API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
