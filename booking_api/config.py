# booking_api/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/booking.db"
    redis_url: str | None = None
    log_level: str = "INFO"

    # Scheduling defaults (per-tenant opening hours override the window)
    default_duration_minutes: int = 60
    opening_time: str = "09:00"
    closing_time: str = "18:00"
    alternative_step_minutes: int = 30
    alternatives_limit: int = 5
    next_days_horizon: int = 7
    grid_step_minutes: int = 15
    default_party_size: int = 2

    booking_lock_timeout_seconds: float = 10.0

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # relative sqlite path → absolute, anchored at the project root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
