from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./staff_scheduler.db"

    # Templates
    DEFAULT_TEMPLATE_ID: str = "TEMPLATE_001"
    BASE_TEMPLATE_ID: str = "YOUR_BASE_SCHEDULE"

    # Business hours, day name -> [open, close]
    BUSINESS_HOURS: dict[str, list[str]] = {
        "Monday": ["10:00", "18:00"],
        "Tuesday": ["10:00", "18:00"],
        "Wednesday": ["10:00", "18:00"],
        "Thursday": ["10:00", "18:00"],
        "Friday": ["10:00", "17:00"],
        "Saturday": ["10:00", "16:00"],
        "Sunday": ["10:00", "15:00"],
    }
    PARTIAL_SHIFT_HOURS: int = 4

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
