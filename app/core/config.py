# /app/core/config.py

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Roster Sync Backend"
    DATABASE_URL: str = "sqlite:///./rostersync.db"
    LOG_LEVEL: str = "INFO"

    # Authentication is handled upstream; requests without an owner header
    # fall back to this id.
    DEFAULT_OWNER_ID: str = "teacher_demo"

    # Class subjects treated as "general": such classes see every unlinked resource.
    GENERAL_SUBJECTS: List[str] = ["general", "فصل عام"]

    CALENDAR_SYNC_DEFAULT: bool = True

    class Config:
        env_file = ".env"


settings = Settings()
