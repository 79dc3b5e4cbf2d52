"""Application configuration."""

import os
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_LOCALTIME = Path("/etc/localtime")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "sugar_meter_kv"
    device_id: str = "default"
    timezone: str | None = None
    log_level: str = "INFO"
    default_daily_limit: int = 36
    visual_capacity_multiplier: float = 5.0
    featured_capacity: int = 10
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Return the configured timezone, or the host's named zone when unset.

    Returns None only when the host zone cannot be named, in which case the
    clock falls back to a fixed UTC offset.
    """
    cleaned = (name or "").strip()
    if cleaned and cleaned.lower() != "local":
        return ZoneInfo(cleaned)
    return host_timezone()


def host_timezone(
    env_tz: str | None = None, localtime: Path = _LOCALTIME
) -> ZoneInfo | None:
    """Return the host's IANA zone from `TZ` or the /etc/localtime link."""
    candidates: list[str] = []
    raw_tz = env_tz if env_tz is not None else os.getenv("TZ", "")
    if raw_tz.strip():
        candidates.append(raw_tz.strip().lstrip(":"))
    if localtime.is_symlink():
        target = str(localtime.resolve())
        _, marker, key = target.partition("zoneinfo/")
        if marker and key:
            candidates.append(key)
    for key in candidates:
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError):
            continue
    return None
