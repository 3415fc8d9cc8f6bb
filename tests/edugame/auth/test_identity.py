import pytest

from edugame.auth.identity import (
    FacultyIdentity,
    FacultySecretAuthentication,
    StudentIdentity,
    StudentPasswordAuthentication,
    authenticate,
    default_authentication_methods,
    resolve_identity,
)
from edugame.auth.jwt_handler import TokenClaims
from edugame.auth.passwords import hash_password
from edugame.core.errors import InvalidCredentialsError, InvalidTokenError
from edugame.models.student import Student


@pytest.fixture
def stored_student(repository) -> Student:
    return repository.insert(
        Student(
            name='Asha Verma',
            email='asha@example.com',
            phone_no='9876543210',
            student_class='XI',
            hashed_password=hash_password('secret123'),
        )
    )


def test_faculty_secret_authentication_handles_only_faculty_email(settings) -> None:
    method = FacultySecretAuthentication(settings)

    assert method.handles(settings.faculty_email) is True
    assert method.handles('asha@example.com') is False


def test_authenticate_faculty_with_secret(settings, repository) -> None:
    methods = default_authentication_methods(settings, repository)

    identity = authenticate(methods, settings.faculty_email, settings.faculty_password)

    assert identity == FacultyIdentity(email=settings.faculty_email)
    assert identity.role == 'faculty'


def test_wrong_faculty_secret_does_not_fall_through_to_students(settings, repository) -> None:
    repository.insert(
        Student(
            name='Impostor',
            email=settings.faculty_email,
            phone_no='9876543210',
            student_class='XII',
            hashed_password=hash_password('student-password'),
        )
    )
    methods = default_authentication_methods(settings, repository)

    with pytest.raises(InvalidCredentialsError):
        authenticate(methods, settings.faculty_email, 'student-password')


def test_authenticate_student_with_password(settings, repository, stored_student) -> None:
    methods = default_authentication_methods(settings, repository)

    identity = authenticate(methods, 'asha@example.com', 'secret123')

    assert isinstance(identity, StudentIdentity)
    assert identity.role == 'student'
    assert identity.student.id == stored_student.id


def test_student_password_authentication_rejects_bad_password(repository, stored_student) -> None:
    method = StudentPasswordAuthentication(repository)

    with pytest.raises(InvalidCredentialsError):
        method.authenticate('asha@example.com', 'wrong-password')


def test_authenticate_without_matching_method_fails() -> None:
    with pytest.raises(InvalidCredentialsError):
        authenticate([], 'asha@example.com', 'secret123')


def test_resolve_identity_maps_roles(settings) -> None:
    assert resolve_identity(TokenClaims(email='asha@example.com', role='student'), settings) == StudentIdentity(
        email='asha@example.com',
    )
    assert resolve_identity(TokenClaims(email=settings.faculty_email, role='faculty'), settings) == FacultyIdentity(
        email=settings.faculty_email,
    )


@pytest.mark.parametrize(
    'claims',
    [
        TokenClaims(email='asha@example.com', role='faculty'),
        TokenClaims(email='asha@example.com', role='admin'),
    ],
)
def test_resolve_identity_rejects_unknown_or_mismatched_roles(settings, claims: TokenClaims) -> None:
    with pytest.raises(InvalidTokenError):
        resolve_identity(claims, settings)
