"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from advisor.config.defaults import (
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_FILE,
    DEFAULT_FORECAST_PATH,
    DEFAULT_RECORD_COUNT,
    DEFAULT_TIMEOUT_SECONDS,
)


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    path: str = DEFAULT_FORECAST_PATH
    # OpenWeatherMap returns at most 40 slots (5 days x 8 per day)
    record_count: int = Field(default=DEFAULT_RECORD_COUNT, ge=1, le=40)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0.0)


class ServiceConfig(BaseModel):
    model_config = {"extra": "forbid"}

    online: bool = True
    cache_file: str = DEFAULT_CACHE_FILE


class AdvisorConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    service: ServiceConfig = ServiceConfig()
