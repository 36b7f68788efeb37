from typing import List, Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./doc_repository.db"
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 240
    bcrypt_rounds: int = 12

    # Учетная запись администратора, создаваемая при первом запуске
    default_admin_name: str = "admin"
    default_admin_password: str = "adminSecret"

    # forbid - нельзя удалить пользователя, у которого есть документы
    # orphan - документы остаются и доступны только администраторам
    user_removal_policy: Literal["forbid", "orphan"] = "forbid"

    # 0 отключает периодическое сжатие хранилища
    compaction_interval_seconds: int = 0

    auto_create_schema: bool = True
    sql_echo: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
