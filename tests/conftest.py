import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from edugame.core.config import Settings
from edugame.database import Base, build_session_factory
from edugame.main import create_app
from edugame.models.game_result import GameResult
from edugame.models.student import Student
from edugame.repository import StudentRepository

FACULTY_EMAIL = 'faculty@school.edu'
FACULTY_PASSWORD = 'faculty-secret'


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url='sqlite://',
        jwt_secret_key='test-secret',
        faculty_email=FACULTY_EMAIL,
        faculty_password=FACULTY_PASSWORD,
    )


@pytest.fixture
def engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[Student.__table__, GameResult.__table__])
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine, tables=[GameResult.__table__, Student.__table__])
        engine.dispose()


@pytest.fixture
def db(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db) -> StudentRepository:
    return StudentRepository(db)


@pytest.fixture
def app(settings, engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
