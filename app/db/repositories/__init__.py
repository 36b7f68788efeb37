from app.db.repositories.base import EntityStore
from app.db.repositories.user_repository import UserStore
from app.db.repositories.document_repository import DocumentStore
from app.db.repositories.structure_repository import StructureStore

__all__ = [
    "EntityStore",
    "UserStore",
    "DocumentStore",
    "StructureStore"
]
