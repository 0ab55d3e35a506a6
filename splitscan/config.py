import os
from functools import lru_cache

from pydantic import BaseModel


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    openai_api_key: str | None = None
    receipt_provider: str = "openai"
    receipt_model: str = "gpt-4o"
    receipt_timeout_seconds: float = 30.0  # the SDK call has no bound of its own
    receipt_strict_numbers: bool = False
    receipt_scan_rate_limit: str = "20/minute"
    cors_origins: list[str] = ["http://localhost:5173"]
    sentry_dsn: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            receipt_provider=os.getenv("RECEIPT_PROVIDER", "openai"),
            receipt_model=os.getenv("RECEIPT_MODEL", "gpt-4o"),
            receipt_timeout_seconds=float(os.getenv("RECEIPT_TIMEOUT_SECONDS", "30")),
            receipt_strict_numbers=_env_bool("RECEIPT_STRICT_NUMBERS"),
            receipt_scan_rate_limit=os.getenv("RECEIPT_SCAN_RATE_LIMIT", "20/minute"),
            cors_origins=[o.strip() for o in origins if o.strip()],
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@lru_cache
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return Settings.from_env()
