from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

SCORING_POLICIES = {"hybrid", "local"}
SIMILARITY_PROVIDERS = {"huggingface", "sentence-transformers", "openai", "hashing"}


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
    api_key: str | None
    auth_mode: str
    auth_tokens: tuple[str, ...]
    supabase_url: str | None
    supabase_anon_key: str | None
    auth_timeout_s: float
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    max_upload_bytes: int
    scoring_policy: str
    similarity_provider: str
    similarity_failure_mode: str
    similarity_model: str
    similarity_endpoint: str
    similarity_timeout_s: float
    hf_api_token: str | None
    openai_embedding_model: str
    resume_db_path: str
    analytics_enabled: bool
    analytics_db_path: str
    analytics_retention_days: int


settings = Settings(
    api_key=_get_env("API_KEY"),
    auth_mode=(_get_env("AUTH_MODE", "supabase") or "supabase").strip().lower(),
    auth_tokens=_get_env_list("AUTH_TOKENS", []),
    supabase_url=_get_env("SUPABASE_URL"),
    supabase_anon_key=_get_env("SUPABASE_ANON_KEY"),
    auth_timeout_s=_get_env_float("AUTH_TIMEOUT_S", 10.0),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", True),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    scoring_policy=(_get_env("SCORING_POLICY", "hybrid") or "hybrid").strip().lower(),
    similarity_provider=(_get_env("SIMILARITY_PROVIDER", "huggingface") or "huggingface").strip().lower(),
    similarity_failure_mode=(_get_env("SIMILARITY_FAILURE_MODE", "fail") or "fail").strip().lower(),
    similarity_model=_get_env("SIMILARITY_MODEL", "sentence-transformers/all-MiniLM-L6-v2")
    or "sentence-transformers/all-MiniLM-L6-v2",
    similarity_endpoint=_get_env(
        "SIMILARITY_ENDPOINT",
        "https://router.huggingface.co/hf-inference/models/sentence-transformers/all-MiniLM-L6-v2",
    )
    or "https://router.huggingface.co/hf-inference/models/sentence-transformers/all-MiniLM-L6-v2",
    similarity_timeout_s=_get_env_float("SIMILARITY_TIMEOUT_S", 20.0),
    hf_api_token=_get_env("HF_API_TOKEN"),
    openai_embedding_model=_get_env("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small") or "text-embedding-3-small",
    resume_db_path=_get_env("RESUME_DB_PATH", "data/resumes.db") or "data/resumes.db",
    analytics_enabled=_get_env_bool("ANALYTICS_ENABLED", True),
    analytics_db_path=_get_env("ANALYTICS_DB_PATH", "data/analytics.db") or "data/analytics.db",
    analytics_retention_days=_get_env_int("ANALYTICS_RETENTION_DAYS", 180),
)

if settings.auth_mode not in {"supabase", "tokens"}:
    raise RuntimeError("AUTH_MODE must be either 'supabase' or 'tokens'.")

if settings.scoring_policy not in SCORING_POLICIES:
    raise RuntimeError("SCORING_POLICY must be either 'hybrid' or 'local'.")

if settings.similarity_provider not in SIMILARITY_PROVIDERS:
    raise RuntimeError(
        f"SIMILARITY_PROVIDER must be one of: {', '.join(sorted(SIMILARITY_PROVIDERS))}."
    )

if settings.similarity_failure_mode not in {"fail", "local"}:
    raise RuntimeError("SIMILARITY_FAILURE_MODE must be either 'fail' or 'local'.")
