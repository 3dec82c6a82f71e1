"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from swiss_nutrition_mcp.adapters.blv_client import DEFAULT_BASE_URL
from swiss_nutrition_mcp.domain.language import Language

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    nutrition_api_base_url: str = DEFAULT_BASE_URL
    nutrition_api_timeout_seconds: float = 10
    default_language: Language = "en"
    server_name: str = "swiss-nutrition-mcp-server"
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    log_level: str = "INFO"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
