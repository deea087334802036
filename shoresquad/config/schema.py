"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from shoresquad.config.defaults import (
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_DB_PATH,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    NEA_FOUR_DAY_URL,
    NEA_TWO_HOUR_URL,
)


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    multi_day_url: str = NEA_FOUR_DAY_URL
    current_url: str = NEA_TWO_HOUR_URL
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=1)
    user_agent: str = DEFAULT_USER_AGENT


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL_SECONDS, ge=1)
    db_path: str = DEFAULT_DB_PATH


class ShoreSquadConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    cache: CacheConfig = CacheConfig()
