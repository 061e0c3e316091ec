from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_GEMINI_MODELS = (
    "gemini-2.0-flash",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-2.5-flash-lite",
    "gemini-pro",
)


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


def _get_env_list(name: str, default: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def _get_api_key(name: str) -> str | None:
    raw = (_get_env(name) or "").strip()
    if not raw or _looks_like_placeholder(raw):
        return None
    return raw


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str | None
    gemini_models: tuple[str, ...]
    gemini_base_url: str
    gemini_timeout_s: float
    gemini_temperature: float
    gemini_max_output_tokens: int
    max_upload_bytes: int
    rate_limit: str
    rate_limit_enabled: bool
    trust_x_forwarded_for: bool
    log_level: str
    log_text_max_chars: int
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool

    @property
    def upstream_configured(self) -> bool:
        return bool(self.gemini_api_key)


def load_settings() -> Settings:
    return Settings(
        gemini_api_key=_get_api_key("GEMINI_API_KEY"),
        gemini_models=_get_env_list("GEMINI_MODELS", DEFAULT_GEMINI_MODELS),
        gemini_base_url=(
            _get_env("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1")
            or "https://generativelanguage.googleapis.com/v1"
        ).rstrip("/"),
        gemini_timeout_s=_get_env_float("GEMINI_TIMEOUT_S", 15.0),
        gemini_temperature=_get_env_float("GEMINI_TEMPERATURE", 0.1),
        gemini_max_output_tokens=_get_env_int("GEMINI_MAX_OUTPUT_TOKENS", 2000),
        max_upload_bytes=_get_env_int("MAX_UPLOAD_MB", 10) * 1024 * 1024,
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        trust_x_forwarded_for=_get_env_bool("TRUST_X_FORWARDED_FOR", False),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        log_text_max_chars=_get_env_int("LOG_TEXT_MAX_CHARS", 200),
        sentry_dsn=_get_env("SENTRY_DSN"),
        cors_allowed_origins=_get_env_list(
            "CORS_ALLOWED_ORIGINS",
            [
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            ],
        ),
        cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX", r"^https:\/\/[a-z0-9-]+-.*\.vercel\.app$"),
        cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    )


settings = load_settings()

if settings.max_upload_bytes <= 0:
    raise RuntimeError("MAX_UPLOAD_MB must be a positive integer.")

if not settings.gemini_models:
    raise RuntimeError("GEMINI_MODELS must name at least one model.")
