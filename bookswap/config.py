"""Application configuration module."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = Field(default="development", alias="APP_ENV")
    database_url: str = Field(default="postgresql://127.0.0.1:5432/bookswap", alias="DATABASE_URL")
    db_timeout: float = Field(default=10.0, gt=0, alias="DB_TIMEOUT")
    db_pool_min_size: int = Field(default=1, ge=0, alias="DB_POOL_MIN_SIZE")
    db_pool_max_size: int = Field(default=10, ge=1, alias="DB_POOL_MAX_SIZE")

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
