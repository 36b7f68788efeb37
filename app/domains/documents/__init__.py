from app.domains.documents.entities import Document
from app.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentQuery, DocumentResponse
)

__all__ = [
    "Document",
    "DocumentCreate", "DocumentUpdate", "DocumentQuery", "DocumentResponse"
]
