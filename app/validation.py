from typing import List

from pydantic import Field, FilePath, ValidationError
from pydantic_settings import BaseSettings

from .constants import (
    DEFAULT_PORT,
    DEFAULT_SHEET_RANGE,
    DEFAULT_SHORT_CACHE_TTL_SECONDS,
    DEFAULT_TWILIO_API_URL,
    DEFAULT_TWILIO_TIMEOUT_SECONDS,
)

# [0-9] explícito: \d aceitaria dígitos Unicode
PHONE_PATTERN = r'^\+[1-9][0-9]{1,14}$'
TWILIO_SID_PATTERN = r'^[A-Z]{2}[0-9a-f]{32}$'
SHEET_ID_PATTERN = r'^[a-zA-Z0-9_-]+$'


class Settings(BaseSettings):
    """Configuração do processo, lida das variáveis de ambiente (TWILIO_ACCOUNT_SID, PORT, ...)."""

    model_config = {
        "env_ignore_empty": True,
        "extra": "ignore",
    }

    twilio_account_sid: str = Field(pattern=TWILIO_SID_PATTERN)
    twilio_auth_sid: str = Field(pattern=TWILIO_SID_PATTERN)
    twilio_auth_token: str = Field(min_length=1)
    twilio_from_number: str = Field(pattern=PHONE_PATTERN)
    twilio_api_url: str = Field(default=DEFAULT_TWILIO_API_URL, min_length=1)
    twilio_timeout_seconds: int = Field(default=DEFAULT_TWILIO_TIMEOUT_SECONDS, ge=1)

    google_sheet_id: str = Field(pattern=SHEET_ID_PATTERN)
    google_token_path: FilePath
    google_sheet_range: str = Field(default=DEFAULT_SHEET_RANGE, min_length=1)

    short_cache_ttl_seconds: int = Field(default=DEFAULT_SHORT_CACHE_TTL_SECONDS, ge=1)
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    sentry_dsn: str = ""
    debug_mode: bool = False


def format_errors(exc: ValidationError) -> List[str]:
    """Uma linha por variável inválida, ex: 'PORT: Input should be a valid integer'."""
    errors = []
    for error in exc.errors():
        name = "_".join(str(part) for part in error.get("loc", ())).upper() or "settings"
        errors.append(f"{name}: {error.get('msg')}")
    return errors


def load_settings() -> Settings:
    """Lê e valida o ambiente. Levanta pydantic.ValidationError com todas as violações."""
    return Settings()
