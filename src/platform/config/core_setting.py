from enum import StrEnum
from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class StoreBackend(StrEnum):
    POSTGRES = 'postgres'
    MEMORY = 'memory'


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Bus Seating'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Logging
    LOG_TIMEZONE: str = 'Europe/Rome'

    # Seating store backend: 'postgres' (SQLAlchemy) or 'memory' (single process)
    SEATING_STORE_BACKEND: StoreBackend = StoreBackend.POSTGRES

    @field_validator('SEATING_STORE_BACKEND', mode='before')
    @classmethod
    def normalize_store_backend(cls, v: str | StoreBackend) -> str | StoreBackend:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'bus_seating'
    POSTGRES_PORT: int = 5432

    # Full SQLAlchemy URL, takes precedence over POSTGRES_* (e.g. sqlite+aiosqlite:///:memory:)
    DATABASE_URL_ASYNC_OVERRIDE: str | None = None

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL_ASYNC_OVERRIDE:
            return self.DATABASE_URL_ASYNC_OVERRIDE
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30  # seconds
    DB_POOL_RECYCLE: int = 3600  # seconds
    DB_POOL_PRE_PING: bool = True


settings = Settings()  # type: ignore
