"""
Configuration settings using Pydantic Settings.
"""

from pathlib import Path
from pydantic import model_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

import os

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    BACKBOARD_API_KEY: str = os.environ.get("BACKBOARD_API_KEY") or ""
    BACKBOARD_ASSISTANT_ID: str = ""
    BACKBOARD_ASSISTANT_NAME: str = "HoloHub NPC Roleplay"

    LLM_PROVIDER: str = "google"
    MODEL_NAME: str = "gemini-2.0-flash"

    DATABASE_PATH: str = "database/holohub.db"

    NPC_DEFAULT_PERSONALITY: str = "a standard Star Wars character"
    NPC_INITIAL_HISTORY: str = "NPC created."
    NPC_OFFLINE_REPLY: str = "The AI seems to be offline... try again later."
    NPC_FAILURE_NOTICE: str = "[System] The AI failed to respond. It might be a network issue."
    NPC_PROMPT_HISTORY_MAX_CHARS: int = 6000

    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    DEBUG: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    @model_validator(mode="after")
    def resolve_relative_paths(self):
        db_path = Path(self.DATABASE_PATH)
        if not db_path.is_absolute():
            self.DATABASE_PATH = str((BASE_DIR / db_path).resolve())
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    :return: Cached Settings instance
    :rtype: Settings
    """
    return Settings()


settings = get_settings()
