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


def _get_env_float(name: str, default: float) -> float:
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
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    ai_enabled: bool
    ai_provider: str
    ai_model: str
    theme_model: str
    openai_api_key: str | None
    openai_base_url: str | None
    modelscope_api_key: str | None
    ai_timeout_s: float
    ai_request_timeout_s: float
    ai_max_retries: int
    theme_strategy: str
    journal_remote_fallback: bool
    career_catalog_path: str | None


_ai_model = (_get_env("AI_MODEL", "gpt-4o-mini") or "gpt-4o-mini").strip()

settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:9002",
        ],
    ),
    ai_enabled=_get_env_bool("AI_ENABLED", True),
    ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
    ai_model=_ai_model,
    theme_model=(_get_env("THEME_MODEL", _ai_model) or _ai_model).strip(),
    openai_api_key=_get_env("OPENAI_API_KEY"),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
    modelscope_api_key=_get_env("MODELSCOPE_API_KEY"),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 30.0),
    ai_request_timeout_s=_get_env_float("AI_REQUEST_TIMEOUT_S", 20.0),
    ai_max_retries=_get_env_int("AI_MAX_RETRIES", 2),
    theme_strategy=(_get_env("THEME_STRATEGY", "remote") or "remote").strip().lower(),
    journal_remote_fallback=_get_env_bool("JOURNAL_REMOTE_FALLBACK", True),
    career_catalog_path=_get_env("CAREER_CATALOG_PATH"),
)

if settings.theme_strategy not in {"remote", "keywords"}:
    raise RuntimeError("THEME_STRATEGY must be either 'remote' or 'keywords'.")

__all__ = ["Settings", "settings"]
