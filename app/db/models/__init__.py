from app.db.models.user import User
from app.db.models.document import Document
from app.db.models.structure import Structure

__all__ = [
    "User",
    "Document",
    "Structure"
]
