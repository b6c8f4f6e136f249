from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Timekeeper"
    app_env: str = "development"  # development, testing, production
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./timekeeper.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_busy_timeout_seconds: float = 5.0  # SQLite lock wait before StoreUnavailable

    # Display
    default_timezone: str = "US/Pacific"

    @field_validator("default_timezone")
    @classmethod
    def validate_default_timezone(cls, v: str) -> str:
        from src.timekeeper.core.accounting import load_timezone
        from src.timekeeper.core.exceptions import InvalidTimezoneError

        try:
            load_timezone(v)
        except InvalidTimezoneError as e:
            raise ValueError(str(e)) from e
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
