"""Student model definitions."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from edugame.database import Base

STUDENT_ROLE = "student"
FACULTY_ROLE = "faculty"


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Student(Base):
    """A registered student and the game results they own."""
    __tablename__ = "students"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone_no = Column(String, nullable=False)
    student_class = Column("class", String(3), nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=STUDENT_ROLE)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    game_results = relationship(
        "GameResult",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="GameResult.id",
    )
