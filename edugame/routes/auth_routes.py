import logging
import re
from typing import Literal

from fastapi import APIRouter, Depends, Response, status
from pydantic import AliasChoices, BaseModel, Field, field_validator

from edugame.auth import jwt_handler
from edugame.auth.dependencies import get_current_identity, get_repository, get_settings
from edugame.auth.identity import Identity, StudentIdentity, authenticate, default_authentication_methods
from edugame.auth.passwords import hash_password
from edugame.core.config import Settings, cookie_domain_for
from edugame.core.errors import InvalidCredentialsError, NotFoundError, ValidationError
from edugame.models.student import STUDENT_ROLE, Student
from edugame.repository import StudentRepository
from edugame.schemas import MessageResponse, PublicStudentResponse, StudentResponse

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$')
# Any run of ten digits is accepted, wherever it sits in the value.
PHONE_PATTERN = re.compile(r'\d{10}')
MIN_PASSWORD_LENGTH = 6
MAX_EMAIL_LENGTH = 254


class RegisterRequest(BaseModel):
    name: str
    email: str = Field(max_length=MAX_EMAIL_LENGTH)
    phone_no: str = Field(alias='phoneNo')
    student_class: Literal['XI', 'XII'] = Field(validation_alias=AliasChoices('class', 'studentClass'))
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    confirm_password: str = Field(alias='confirmPassword')

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = value.strip()
        if not EMAIL_PATTERN.match(normalized):
            raise ValueError('Please fill a valid email address.')
        return normalized

    @field_validator('phone_no')
    @classmethod
    def validate_phone_no(cls, value: str) -> str:
        if not PHONE_PATTERN.search(value):
            raise ValueError(f'{value} is not a valid phone number!')
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip()


class RegisterResponse(BaseModel):
    message: str
    user: StudentResponse
    access_token: str
    token_type: str = 'bearer'


class LoginResponse(BaseModel):
    message: str
    role: str
    user: PublicStudentResponse | None = None
    access_token: str
    token_type: str = 'bearer'


class ProfileResponse(BaseModel):
    user: StudentResponse


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.jwt_expires_minutes * 60,
        httponly=True,
        samesite=settings.cookie_samesite,
        secure=settings.cookie_secure,
        domain=cookie_domain_for(settings),
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        samesite=settings.cookie_samesite,
        secure=settings.cookie_secure,
        domain=cookie_domain_for(settings),
    )


@router.post('/register', response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    response: Response,
    repository: StudentRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    if data.password != data.confirm_password:
        raise ValidationError('Passwords do not match.')

    student = repository.insert(
        Student(
            name=data.name,
            email=data.email,
            phone_no=data.phone_no,
            student_class=data.student_class,
            hashed_password=hash_password(data.password),
            role=STUDENT_ROLE,
            game_results=[],
        )
    )
    logger.info('Registered student %s', student.id)

    token = jwt_handler.create_access_token(settings, email=student.email, role=STUDENT_ROLE)
    set_session_cookie(response, token, settings)

    return RegisterResponse(
        message='Student registered successfully',
        user=StudentResponse.model_validate(student),
        access_token=token,
    )


@router.post('/login', response_model=LoginResponse, response_model_exclude_none=True)
def login(
    data: LoginRequest,
    response: Response,
    repository: StudentRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    methods = default_authentication_methods(settings, repository)
    try:
        identity = authenticate(methods, data.email, data.password)
    except InvalidCredentialsError:
        logger.warning('Failed login attempt for %s', data.email)
        raise

    token = jwt_handler.create_access_token(settings, email=identity.email, role=identity.role)
    set_session_cookie(response, token, settings)

    if isinstance(identity, StudentIdentity):
        return LoginResponse(
            message='Login successful',
            role=identity.role,
            user=PublicStudentResponse.model_validate(identity.student),
            access_token=token,
        )

    return LoginResponse(message='Faculty login successful', role=identity.role, access_token=token)


@router.get('/profile', response_model=ProfileResponse)
def profile(
    identity: Identity = Depends(get_current_identity),
    repository: StudentRepository = Depends(get_repository),
):
    student = repository.find_by_email(identity.email)
    if student is None:
        raise NotFoundError('User not found.')
    return ProfileResponse(user=StudentResponse.model_validate(student))


@router.post('/logout', response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return MessageResponse(message='Logged out successfully')
