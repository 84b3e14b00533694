"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./flourish.db"
    CORS_ORIGINS: str = "http://localhost:5173"
    LOG_LEVEL: str = "INFO"

    # Naive event dates/times are wall-clock values in this zone
    EVENT_TIMEZONE: str = "UTC"
    JOIN_TAB_GRACE_MINUTES: int = 60

    ICAL_UID_DOMAIN: str = "eventapp.example.com"
    ICAL_EVENT_DURATION_HOURS: int = 2

    class Config:
        env_file = ".env"


settings = Settings()
