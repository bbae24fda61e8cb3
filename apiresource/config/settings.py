from __future__ import annotations

import os
from typing import Optional


class Settings:
    # HTTP client
    BASE_URL: str = os.getenv("API_RESOURCE_BASE_URL", "")
    TIMEOUT: float = float(os.getenv("API_RESOURCE_TIMEOUT", "30"))
    TOKEN: Optional[str] = os.getenv("API_RESOURCE_TOKEN")

    # Models
    DATE_FORMAT: str = os.getenv("API_RESOURCE_DATE_FORMAT", "%Y-%m-%d %H:%M:%S")
    SNAKE_ATTRIBUTES: bool = os.getenv("API_RESOURCE_SNAKE_ATTRIBUTES", "False").lower() == "true"

    # Logging
    LOG_CHANNEL: str = os.getenv("LOG_CHANNEL", "stderr")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "warning")


settings = Settings()
