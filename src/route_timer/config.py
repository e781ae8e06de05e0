from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    METRICS_BACKEND: Literal["memory", "prometheus"] = "memory"
    METRICS_EXCLUDED_PATHS: list[str] = []

    REPORTER_INTERVAL_SECONDS: float = 1.0

    DEMO_AVG_DURATION_MS: float = 100.0
    DEMO_STD_DEV_MS: float = 10.0

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "info"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
