from fastapi import APIRouter, Depends, status
from typing import List, Optional

from app.api.http.dependencies import get_repository
from app.core.auth import get_current_actor_id, get_optional_actor_id
from app.domains.identity.schemas import UserCreate, UserResponse, UserUpdate
from app.domains.repository import Repository

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=List[UserResponse])
async def get_users(
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Получение списка пользователей"""
    users = await repository.users.list_users(actor_id)
    return [UserResponse.model_validate(user) for user in users]


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    actor_id: Optional[str] = Depends(get_optional_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Регистрация нового пользователя"""
    user = await repository.users.create_user(user_data, actor_id)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Получение информации о пользователе"""
    user = await repository.users.get_user(user_id, actor_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    update_data: UserUpdate,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Обновление пользователя"""
    user = await repository.users.update_user(user_id, update_data, actor_id)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Удаление пользователя"""
    await repository.users.remove_user(user_id, actor_id)
