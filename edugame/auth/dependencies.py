from collections.abc import Iterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from edugame.auth import jwt_handler
from edugame.auth.identity import FacultyIdentity, Identity, resolve_identity
from edugame.core.config import Settings
from edugame.core.errors import ForbiddenError
from edugame.repository import StudentRepository

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_repository(db: Session = Depends(get_db)) -> StudentRepository:
    return StudentRepository(db)


def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Identity:
    token = jwt_handler.extract_token(request, credentials, settings)
    claims = jwt_handler.decode_access_token(settings, token)
    return resolve_identity(claims, settings)


def require_faculty(identity: Identity = Depends(get_current_identity)) -> FacultyIdentity:
    if not isinstance(identity, FacultyIdentity):
        raise ForbiddenError()
    return identity
