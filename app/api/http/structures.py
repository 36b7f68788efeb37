from fastapi import APIRouter, Depends, status
from typing import List

from app.api.http.dependencies import get_repository
from app.core.auth import get_current_actor_id
from app.domains.repository import Repository
from app.domains.structures.schemas import StructureCreate, StructureResponse, StructureUpdate

router = APIRouter(prefix="/structures", tags=["structures"])


@router.get("/", response_model=List[StructureResponse])
async def get_structures(repository: Repository = Depends(get_repository)):
    """Получение списка структур"""
    structures = await repository.structures.list_structures()
    return [StructureResponse.model_validate(s) for s in structures]


@router.get("/{structure_id}", response_model=StructureResponse)
async def get_structure(structure_id: str, repository: Repository = Depends(get_repository)):
    structure = await repository.structures.get_structure(structure_id)
    return StructureResponse.model_validate(structure)


@router.post("/", response_model=StructureResponse, status_code=status.HTTP_201_CREATED)
async def create_structure(
    structure_data: StructureCreate,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Создание структуры (только администратор)"""
    structure = await repository.structures.create_structure(structure_data, actor_id)
    return StructureResponse.model_validate(structure)


@router.put("/{structure_id}", response_model=StructureResponse)
async def update_structure(
    structure_id: str,
    update_data: StructureUpdate,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    structure = await repository.structures.update_structure(structure_id, update_data, actor_id)
    return StructureResponse.model_validate(structure)


@router.delete("/{structure_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_structure(
    structure_id: str,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    await repository.structures.remove_structure(structure_id, actor_id)
