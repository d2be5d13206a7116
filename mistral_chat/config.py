import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel

from .errors import ConfigurationError

DEFAULT_ENDPOINT = "https://api.mistral.ai/v1/chat/completions"
DEFAULT_MODEL = "mistral-large-latest"
DEFAULT_TEMPERATURE = 0.3

AVAILABLE_MODELS = [
    "mistral-large-latest",
    "open-mistral-7b",
    "codestral-latest",
]

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseModel):
    """Server-side configuration, read once from the environment.

    The relay receives an instance at construction time instead of looking
    up the credential itself.
    """
    api_key: Optional[str] = None
    default_model: str = DEFAULT_MODEL
    endpoint: str = DEFAULT_ENDPOINT
    timeout: Optional[float] = None  # seconds; None waits forever
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = os.getenv("MISTRAL_TIMEOUT")
        if timeout:
            try:
                timeout = float(timeout)
            except ValueError:
                raise ConfigurationError(f"MISTRAL_TIMEOUT must be a number of seconds, got {timeout!r}") from None
        log_level = (os.getenv("LOG_LEVEL") or "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")
        origins = os.getenv("CORS_ALLOWED_ORIGINS", "*")
        return cls(
            api_key=os.getenv("MISTRAL_API_KEY") or None,
            default_model=os.getenv("MISTRAL_MODEL") or DEFAULT_MODEL,
            endpoint=os.getenv("MISTRAL_ENDPOINT") or DEFAULT_ENDPOINT,
            timeout=timeout or None,
            cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            log_level=log_level,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
