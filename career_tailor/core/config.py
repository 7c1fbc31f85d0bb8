from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float | None) -> float | None:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    supabase_url: str | None
    supabase_anon_key: str | None
    functions_base_url: str | None
    functions_timeout_s: float | None
    functions_auth_mode: str
    rescore_debounce_ms: int
    min_job_description_chars: int
    min_resume_chars: int
    export_dir: str
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]

    @property
    def resolved_functions_url(self) -> str | None:
        if self.functions_base_url:
            return self.functions_base_url.rstrip("/")
        if self.supabase_url:
            return f"{self.supabase_url.rstrip('/')}/functions/v1"
        return None


settings = Settings(
    supabase_url=_get_env("SUPABASE_URL"),
    supabase_anon_key=_get_env("SUPABASE_ANON_KEY"),
    functions_base_url=_get_env("FUNCTIONS_BASE_URL"),
    functions_timeout_s=_get_env_float("FUNCTIONS_TIMEOUT_S", None),
    functions_auth_mode=(_get_env("FUNCTIONS_AUTH_MODE", "public") or "public").strip().lower(),
    rescore_debounce_ms=_get_env_int("RESCORE_DEBOUNCE_MS", 2000),
    min_job_description_chars=_get_env_int("MIN_JOB_DESCRIPTION_CHARS", 50),
    min_resume_chars=_get_env_int("MIN_RESUME_CHARS", 100),
    export_dir=_get_env("EXPORT_DIR", "exports") or "exports",
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
)

if settings.functions_auth_mode not in {"public", "protected"}:
    raise RuntimeError("FUNCTIONS_AUTH_MODE must be either 'public' or 'protected'.")
