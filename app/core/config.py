from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/seed-wizard.db"

    # Redis
    REDIS_URL: str = "redis://redis:6379/0"

    # Single-user mode: every seed belongs to this profile
    DEFAULT_PROFILE_ID: int = 1

    # AI extraction
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_BASE_URL: str = "https://api.anthropic.com/v1"
    ANTHROPIC_MODEL: str = "claude-sonnet-4-20250514"
    EXTRACTION_CACHE_TTL_SECONDS: int = 7 * 24 * 60 * 60  # 7 days

    # Planting calendar
    PLANTABLE_WINDOW_WEEKS: int = 4

    # App
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    REQUEST_LOGGING_ENABLED: bool = True

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()
