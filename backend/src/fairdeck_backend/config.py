"""Service configuration loaded from the environment."""
from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


load_dotenv()


class ServiceConfig(BaseModel):
    log_level: str = "INFO"
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    api_prefix: str = "/api"

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_env(cls) -> ServiceConfig:
        origins = os.getenv("FAIRDECK_CORS_ORIGINS", "*")
        return cls(
            log_level=os.getenv("FAIRDECK_LOG_LEVEL", "INFO"),
            cors_allow_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            api_prefix=os.getenv("FAIRDECK_API_PREFIX", "/api"),
        )


config = ServiceConfig.from_env()
