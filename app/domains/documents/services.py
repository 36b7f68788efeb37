import logging
from typing import List, Optional, TYPE_CHECKING

from app.core.errors import Forbidden, ImmutableFieldViolation, NotFound, ValidationError
from app.domains.access import Action, assert_access, resolve_actor
from app.domains.documents.entities import Document
from app.domains.documents.schemas import DocumentCreate, DocumentQuery, DocumentUpdate

if TYPE_CHECKING:
    from app.db.repositories.document_repository import DocumentStore
    from app.db.repositories.user_repository import UserStore

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = ("title", "description", "type", "sub_type")


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(self, documents: "DocumentStore", users: "UserStore"):
        self.documents = documents
        self.users = users

    async def _get_or_404(self, document_id: str) -> Document:
        document = await self.documents.get(document_id)
        if document is None:
            raise NotFound("Document", document_id)
        return document

    async def list_documents(
        self,
        actor_id: Optional[str],
        query: Optional[DocumentQuery] = None
    ) -> List[Document]:
        """Администратор видит все документы, остальные - только свои"""
        actor = await resolve_actor(self.users, actor_id)
        criteria = query.to_filter() if query else {}

        if not actor.is_admin:
            if criteria.get("owner", actor.id) != actor.id:
                raise Forbidden("Only an admin may list documents of other users")
            criteria["owner"] = actor.id

        return await self.documents.query(criteria)

    async def get_document(self, document_id: str, actor_id: Optional[str]) -> Document:
        """Получение документа по идентификатору"""
        actor = await resolve_actor(self.users, actor_id)
        document = await self._get_or_404(document_id)
        assert_access(actor, Action.READ, document)
        return document

    async def create_document(self, document_data: DocumentCreate, actor_id: Optional[str]) -> Document:
        """Создание нового документа; владелец - автор запроса"""
        actor = await resolve_actor(self.users, actor_id)
        document = Document.create_document(
            owner=actor.id,
            title=document_data.title,
            description=document_data.description,
            type=document_data.type,
            sub_type=document_data.sub_type,
            content=document_data.content
        )
        assert_access(actor, Action.CREATE, document)

        created = await self.documents.insert_owned(document)
        if created is None:
            # автор удален после проверки доступа
            raise Forbidden("Unknown actor")
        logger.info(f"Created document {created.id} owned by {created.owner}")
        return created

    async def update_document(
        self,
        document_id: str,
        update_data: DocumentUpdate,
        actor_id: Optional[str]
    ) -> Document:
        """Обновление документа: владелец или администратор"""
        actor = await resolve_actor(self.users, actor_id)
        document = await self._get_or_404(document_id)
        assert_access(actor, Action.UPDATE, document)

        changes = update_data.changes()

        immutable = set(changes) & Document.IMMUTABLE_FIELDS
        if immutable:
            raise ImmutableFieldViolation(immutable)

        for field in NON_NULLABLE_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null")

        if await self.documents.update(document_id, changes) == 0:
            raise NotFound("Document", document_id)

        return await self._get_or_404(document_id)

    async def remove_document(self, document_id: str, actor_id: Optional[str]) -> None:
        """Удаление документа: владелец или администратор"""
        actor = await resolve_actor(self.users, actor_id)
        document = await self._get_or_404(document_id)
        assert_access(actor, Action.REMOVE, document)

        if await self.documents.remove({"id": document_id}) == 0:
            raise NotFound("Document", document_id)

        logger.info(f"Removed document {document_id}")
