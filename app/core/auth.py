"""Bearer token authentication.

Access tokens are HS256 JWTs signed with the project's JWT secret (the Supabase
convention: `sub` is the user id, `aud` is `authenticated`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.settings import get_settings
from app.domain.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger("app.auth")

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: str | None = None


def decode_access_token(*, token: str, secret: str, audience: str, algorithm: str) -> dict:
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        audience=audience,
        options={"require": ["sub", "exp"]},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> AuthenticatedUser:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    settings = get_settings()
    if not settings.auth_jwt_secret:
        logger.error("AUTH_JWT_SECRET is not set; cannot verify access tokens.")
        raise ConfigurationError("Server configuration error: auth secret missing.")

    try:
        claims = decode_access_token(
            token=credentials.credentials,
            secret=settings.auth_jwt_secret,
            audience=settings.auth_jwt_audience,
            algorithm=settings.auth_jwt_algorithm,
        )
    except jwt.PyJWTError as exc:
        logger.info("Access token rejected", extra={"error": type(exc).__name__})
        raise AuthenticationError("Not authorized, token failed") from None

    return AuthenticatedUser(id=str(claims["sub"]), email=claims.get("email"))
