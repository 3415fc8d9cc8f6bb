"""Outward projections of stored records.

None of these models carry the password hash.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on read; stored timestamps are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class GameResultResponse(BaseModel):
    game_name: str = Field(alias='gameName')
    score: float
    completion_time: float = Field(alias='completionTime')
    total_questions: int = Field(alias='totalQuestions')
    accuracy: float | None = None
    date: datetime

    @field_validator('date')
    @classmethod
    def validate_date(cls, value: datetime) -> datetime:
        return _as_utc(value)

    class Config:
        from_attributes = True
        populate_by_name = True


class StudentResponse(BaseModel):
    id: str
    name: str
    email: str
    phone_no: str = Field(alias='phoneNo')
    student_class: str = Field(alias='class')
    role: str
    created_at: datetime = Field(alias='createdAt')
    game_results: list[GameResultResponse] = Field(default_factory=list, alias='gameResults')

    @field_validator('created_at')
    @classmethod
    def validate_created_at(cls, value: datetime) -> datetime:
        return _as_utc(value)

    class Config:
        from_attributes = True
        populate_by_name = True


class PublicStudentResponse(BaseModel):
    name: str
    email: str
    role: str
    student_class: str = Field(alias='class')

    class Config:
        from_attributes = True
        populate_by_name = True


class MessageResponse(BaseModel):
    message: str
