# app/core/config.py
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# PROJECT_ROOT = parent of app → .../
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Campus Walking Router"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # JSON file with {"nodes": [...], "edges": [...]}; relative to project root
    NETWORK_FILE: str = "data/path.json"

    # "linear" (O(V^2) scan) or "heap"; both return identical routes
    SEARCH_STRATEGY: Literal["linear", "heap"] = "linear"

    def network_path(self) -> Path:
        path = Path(self.NETWORK_FILE)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path


settings = Settings()
