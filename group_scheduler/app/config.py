# group_scheduler/app/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # project root


class Settings(BaseSettings):
    log_level: str = "INFO"

    # How many upcoming dates the weekly pattern is mapped onto
    default_days_ahead: int = 14

    collective_resolution_minutes: int = 15

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="GROUP_SCHEDULER_",
        extra="ignore",
    )


settings = Settings()
