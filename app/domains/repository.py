"""Фасад хранилища: коллекции, сервисы и начальное заполнение.

HTTP-слой работает только с этим объектом. Собственного состояния у фасада
нет: все данные читаются из коллекций при каждом вызове.
"""
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from app.core.errors import DuplicateKey
from app.db.repositories import DocumentStore, EntityStore, StructureStore, UserStore
from app.domains.documents.entities import Document
from app.domains.documents.services import DocumentService
from app.domains.identity.entities import User
from app.domains.identity.services import IdentityService
from app.domains.structures.entities import Structure
from app.domains.structures.services import StructureService

logger = logging.getLogger(__name__)

DEMO_DOCUMENT = {
    "title": "Welcome",
    "description": "Demonstration document created on first start",
    "type": 0,
    "sub_type": 0,
    "content": {"text": "This repository stores structured documents."},
}

DEMO_STRUCTURE = {
    "name": "Basic document",
    "description": "Demonstration structure created on first start",
    "fields": [
        {"name": "title", "type": "string"},
        {"name": "text", "type": "text"},
    ],
}


class Repository:
    """Точка входа для сетевого слоя"""

    def __init__(self, session_factory: async_sessionmaker, user_removal_policy: str = "forbid"):
        self.user_store = UserStore(session_factory)
        self.document_store = DocumentStore(session_factory)
        self.structure_store = StructureStore(session_factory)

        self.users = IdentityService(self.user_store, self.document_store, user_removal_policy)
        self.documents = DocumentService(self.document_store, self.user_store)
        self.structures = StructureService(self.structure_store, self.user_store)

    @property
    def stores(self) -> List[EntityStore]:
        return [self.user_store, self.document_store, self.structure_store]

    async def bootstrap(self, admin_name: str = "admin", admin_password: str = "adminSecret") -> None:
        """Начальное заполнение пустых коллекций.

        Каждый шаг выполняется, только если его коллекция пуста, поэтому
        повторный запуск ничего не дублирует.
        """
        if await self.user_store.count() == 0:
            await self._create_default_admin(admin_name, admin_password)

        if await self.document_store.count() == 0:
            owner = await self._find_admin(admin_name)
            if owner is None:
                logger.warning("No admin account found, demonstration document skipped")
            else:
                document = await self.document_store.insert_if_empty(
                    Document.create_document(owner=owner.id, **DEMO_DOCUMENT)
                )
                if document is None:
                    logger.info("Demonstration document already created")
                else:
                    logger.info(f"Created demonstration document {document.id}")

        if await self.structure_store.count() == 0:
            try:
                structure = await self.structure_store.insert(Structure(**DEMO_STRUCTURE))
                logger.info(f"Created demonstration structure {structure.id}")
            except DuplicateKey:
                logger.info("Demonstration structure already created")

    async def _create_default_admin(self, admin_name: str, admin_password: str) -> None:
        try:
            admin = await self.user_store.insert(
                User.create_user(name=admin_name, password=admin_password, is_admin=True)
            )
        except DuplicateKey:
            # другой процесс успел создать администратора
            logger.info(f"Default admin '{admin_name}' already exists")
            return
        logger.info(f"Created default admin account {admin.name} ({admin.id})")

    async def _find_admin(self, admin_name: str) -> Optional[User]:
        admins = await self.user_store.list_admins()
        for admin in admins:
            if admin.name == admin_name:
                return admin
        return admins[0] if admins else None
