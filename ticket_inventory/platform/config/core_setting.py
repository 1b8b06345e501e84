from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Ticket Inventory'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    LOG_TO_FILE: bool = False  # Rotating file sink under logs/

    # Ticketing API (persistence service)
    TICKETING_API_BASE_URL: str = 'http://localhost:8000'
    HTTP_TIMEOUT_SECONDS: float = 10.0  # Per-request transport timeout
    PERSISTENCE_TIMEOUT_SECONDS: Optional[float] = 30.0  # Deadline for one repository call

    @field_validator('TICKETING_API_BASE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip('/')
        return v

    @field_validator('PERSISTENCE_TIMEOUT_SECONDS', mode='before')
    @classmethod
    def disable_non_positive_timeout(cls, v: Optional[float | str]) -> Optional[float]:
        if v is None:
            return None
        if float(v) <= 0:
            return None
        return float(v)


settings = Settings()  # type: ignore
