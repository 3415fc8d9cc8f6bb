from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Request
from fastapi.security import HTTPAuthorizationCredentials

from edugame.core.config import Settings
from edugame.core.errors import ExpiredTokenError, InvalidTokenError, MissingTokenError


@dataclass(frozen=True)
class TokenClaims:
    email: str
    role: str


def create_access_token(
    settings: Settings,
    email: str,
    role: str,
    expires_minutes: int | None = None,
) -> str:
    expire_minutes = settings.jwt_expires_minutes if expires_minutes is None else expires_minutes
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + timedelta(minutes=expire_minutes)
    payload = {"sub": email, "email": email, "role": role, "exp": expire, "iat": issued_at}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> TokenClaims:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredTokenError() from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(details=str(exc)) from exc

    email = payload.get("email") or payload.get("sub")
    role = payload.get("role")
    if not email or not role:
        raise InvalidTokenError("Invalid token claims.")
    return TokenClaims(email=email, role=role)


def extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str:
    # The session cookie wins over the Authorization header.
    token = request.cookies.get(settings.cookie_name)
    if token:
        return token
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    raise MissingTokenError()
