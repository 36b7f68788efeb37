from fastapi import APIRouter, Depends

from app.api.http.dependencies import get_repository
from app.core.auth import get_current_actor_id
from app.domains.identity.schemas import LoginResponse, UserLogin, UserResponse
from app.domains.repository import Repository

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: UserLogin,
    repository: Repository = Depends(get_repository)
):
    """Вход пользователя: токен и признак администратора"""
    token, user = await repository.users.login_user(login_data.name, login_data.password)
    return LoginResponse(token=token, is_admin=user.is_admin)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    actor_id: str = Depends(get_current_actor_id),
    repository: Repository = Depends(get_repository)
):
    """Получение информации о текущем пользователе"""
    user = await repository.users.get_current_user(actor_id)
    return UserResponse.model_validate(user)
