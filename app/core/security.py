from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from fastapi import Header, status

from app.core.config import settings
from app.core.errors import ResumeAnalyzerError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: str | None = None


def check_api_key(x_api_key: str | None) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise UnauthorizedError("Please provide a valid API key.")


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _configured_tokens() -> dict[str, str]:
    tokens: dict[str, str] = {}
    for entry in settings.auth_tokens:
        token, _, user_id = entry.partition(":")
        if token.strip() and user_id.strip():
            tokens[token.strip()] = user_id.strip()
    return tokens


def _verify_with_supabase(token: str) -> AuthenticatedUser | None:
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ResumeAnalyzerError("AUTH_MODE=supabase requires SUPABASE_URL and SUPABASE_ANON_KEY.")

    url = f"{settings.supabase_url.rstrip('/')}/auth/v1/user"
    headers = {"Authorization": f"Bearer {token}", "apikey": settings.supabase_anon_key}
    try:
        with httpx.Client(timeout=settings.auth_timeout_s) as client:
            response = client.get(url, headers=headers)
    except httpx.HTTPError as exc:
        logger.warning("auth_provider_unreachable: %s", exc)
        raise ResumeAnalyzerError(
            "Authentication provider is unavailable. Please try again.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        ) from exc

    if response.status_code != 200:
        return None
    try:
        payload = response.json()
    except ValueError:
        logger.warning("auth_provider_invalid_payload")
        return None
    user_id = payload.get("id") if isinstance(payload, dict) else None
    if not user_id:
        return None
    return AuthenticatedUser(id=str(user_id), email=payload.get("email"))


def resolve_user(authorization: str | None) -> AuthenticatedUser:
    token = _bearer_token(authorization)
    if not token:
        raise UnauthorizedError("Unauthorized")

    if settings.auth_mode == "tokens":
        user_id = _configured_tokens().get(token)
        user = AuthenticatedUser(id=user_id) if user_id else None
    else:
        user = _verify_with_supabase(token)

    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


def get_current_user(authorization: str | None = Header(default=None)) -> AuthenticatedUser:
    return resolve_user(authorization)
