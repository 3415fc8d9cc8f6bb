"""Caller identities and the ways a caller can prove one.

A caller is either a stored student or the single configured faculty account.
Both the login path and the token path go through this module, so no handler
needs to compare against the faculty email itself.
"""

from dataclasses import dataclass
from typing import Protocol, Union

from edugame.auth.jwt_handler import TokenClaims
from edugame.auth.passwords import secrets_match, verify_password
from edugame.core.config import Settings
from edugame.core.errors import InvalidCredentialsError, InvalidTokenError
from edugame.models.student import FACULTY_ROLE, STUDENT_ROLE, Student
from edugame.repository import StudentRepository


@dataclass(frozen=True)
class StudentIdentity:
    email: str
    student: Student | None = None

    @property
    def role(self) -> str:
        return STUDENT_ROLE


@dataclass(frozen=True)
class FacultyIdentity:
    email: str

    @property
    def role(self) -> str:
        return FACULTY_ROLE


Identity = Union[StudentIdentity, FacultyIdentity]


class AuthenticationMethod(Protocol):
    def handles(self, email: str) -> bool:
        ...

    def authenticate(self, email: str, password: str) -> Identity:
        ...


class FacultySecretAuthentication:
    """Checks the configured faculty secret; there is no stored hash."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def handles(self, email: str) -> bool:
        return email == self.settings.faculty_email

    def authenticate(self, email: str, password: str) -> Identity:
        if not secrets_match(password, self.settings.faculty_password):
            raise InvalidCredentialsError('Invalid faculty credentials.')
        return FacultyIdentity(email=email)


class StudentPasswordAuthentication:
    def __init__(self, repository: StudentRepository) -> None:
        self.repository = repository

    def handles(self, email: str) -> bool:
        return True

    def authenticate(self, email: str, password: str) -> Identity:
        student = self.repository.find_by_email(email)
        if student is None or not verify_password(password, student.hashed_password):
            raise InvalidCredentialsError()
        return StudentIdentity(email=student.email, student=student)


def default_authentication_methods(
    settings: Settings,
    repository: StudentRepository,
) -> list[AuthenticationMethod]:
    return [FacultySecretAuthentication(settings), StudentPasswordAuthentication(repository)]


def authenticate(methods: list[AuthenticationMethod], email: str, password: str) -> Identity:
    for method in methods:
        if method.handles(email):
            return method.authenticate(email, password)
    raise InvalidCredentialsError()


def resolve_identity(claims: TokenClaims, settings: Settings) -> Identity:
    if claims.role == FACULTY_ROLE:
        if claims.email != settings.faculty_email:
            raise InvalidTokenError('Invalid token claims.')
        return FacultyIdentity(email=claims.email)
    if claims.role == STUDENT_ROLE:
        return StudentIdentity(email=claims.email)
    raise InvalidTokenError('Invalid token claims.')
