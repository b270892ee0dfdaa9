"""Runtime configuration, read from ``ORDERSTORE_*`` environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    redis_url: str = "redis://localhost:6379/0"
    page_size: int = Field(default=50, gt=0)
    socket_timeout: float = Field(default=5.0, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "ORDERSTORE_",
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
