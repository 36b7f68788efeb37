from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from app.api.http.dependencies import get_repository
from app.core.auth import get_current_actor_id
from app.domains.documents.schemas import (
    DocumentCreate, DocumentQuery, DocumentResponse, DocumentUpdate
)
from app.domains.repository import Repository

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("/", response_model=List[DocumentResponse])
async def get_documents(
    title: Optional[str] = Query(None),
    type: Optional[int] = Query(None),
    sub_type: Optional[int] = Query(None, alias="subType"),
    owner: Optional[str] = Query(None),
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Получение списка документов"""
    query = DocumentQuery(title=title, type=type, sub_type=sub_type, owner=owner)
    documents = await repository.documents.list_documents(actor_id, query)
    return [DocumentResponse.model_validate(doc) for doc in documents]


@router.post("/", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Создание нового документа"""
    document = await repository.documents.create_document(document_data, actor_id)
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Получение документа по идентификатору"""
    document = await repository.documents.get_document(document_id, actor_id)
    return DocumentResponse.model_validate(document)


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    update_data: DocumentUpdate,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Обновление документа"""
    document = await repository.documents.update_document(document_id, update_data, actor_id)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Удаление документа"""
    await repository.documents.remove_document(document_id, actor_id)
