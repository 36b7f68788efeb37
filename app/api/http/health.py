from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.http.dependencies import get_repository
from app.core.errors import StorageFault
from app.domains.repository import Repository

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(repository: Repository = Depends(get_repository)):
    """Проверка работоспособности и доступности хранилища"""
    try:
        await repository.user_store.count()
    except StorageFault as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "detail": e.message}
        )
    return {"status": "ok"}
