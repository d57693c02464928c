"""
Configuration helpers for the SkillSwap core.

Settings are read once from environment variables so that repositories and
services never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_ADMIN_EMAIL = "admin@skillswap.com"
STORAGE_BACKENDS = ("memory", "json", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    storage_backend: str
    data_file: str
    database_url: str
    admin_emails: tuple[str, ...]
    seed_sample_users: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _csv(value: str | None) -> tuple[str, ...]:
        return tuple(x.strip().lower() for x in (value or "").split(",") if x.strip())

    backend = (os.getenv("SKILLSWAP_STORAGE") or "json").strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"SKILLSWAP_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}")

    return Settings(
        storage_backend=backend,
        data_file=os.getenv("SKILLSWAP_DATA_FILE", "skillswap_data.json"),
        database_url=os.getenv("DATABASE_URL", ""),
        admin_emails=_csv(os.getenv("ADMIN_EMAILS")) or (DEFAULT_ADMIN_EMAIL,),
        seed_sample_users=_bool(os.getenv("SKILLSWAP_SEED_SAMPLE_USERS"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
