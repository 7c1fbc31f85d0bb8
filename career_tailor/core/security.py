from __future__ import annotations

from fastapi import HTTPException, status

from career_tailor.core.config import settings


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_session(authorization: str | None) -> None:
    if settings.functions_auth_mode != "protected":
        return
    if bearer_token(authorization) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization bearer token.",
        )
