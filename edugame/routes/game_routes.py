import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from edugame.auth.dependencies import get_current_identity, get_repository, require_faculty
from edugame.auth.identity import FacultyIdentity, Identity
from edugame.core.errors import NotFoundError
from edugame.models.student import STUDENT_ROLE
from edugame.repository import StudentRepository
from edugame.schemas import MessageResponse, StudentResponse
from edugame.services.game_results import (
    RECENT_RESULTS_PER_GAME,
    build_game_result,
    drop_game_results,
    keep_recent_results,
)

router = APIRouter(tags=['game-results'])

logger = logging.getLogger(__name__)


class SaveGameResultRequest(BaseModel):
    game_name: str = Field(alias='gameName')
    score: float
    completion_time: float = Field(alias='completionTime', ge=0)
    total_questions: int = Field(alias='totalQuestions', ge=0)
    accuracy: float | None = Field(default=None, ge=0, le=100)

    @field_validator('game_name')
    @classmethod
    def validate_game_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Game name is required.')
        return normalized


class StudentListResponse(BaseModel):
    students: list[StudentResponse]


class ClearedStudentResponse(BaseModel):
    message: str
    student: StudentResponse


@router.post('/save-game-result', response_model=MessageResponse)
def save_game_result(
    data: SaveGameResultRequest,
    identity: Identity = Depends(get_current_identity),
    repository: StudentRepository = Depends(get_repository),
):
    result = build_game_result(
        game_name=data.game_name,
        score=data.score,
        completion_time=data.completion_time,
        total_questions=data.total_questions,
        accuracy=data.accuracy,
    )
    repository.append_game_result(identity.email, result)
    logger.info('Saved %s result for %s', data.game_name, identity.email)

    return MessageResponse(message='Game result saved successfully')


@router.get('/students', response_model=StudentListResponse)
def list_students(
    faculty: FacultyIdentity = Depends(require_faculty),
    repository: StudentRepository = Depends(get_repository),
):
    del faculty
    students = repository.list_by_role(STUDENT_ROLE)
    return StudentListResponse(students=[StudentResponse.model_validate(student) for student in students])


@router.post('/clear-game-results/{student_id}', response_model=ClearedStudentResponse)
def clear_game_results(
    student_id: str,
    faculty: FacultyIdentity = Depends(require_faculty),
    repository: StudentRepository = Depends(get_repository),
):
    student = repository.find_by_id(student_id)
    if student is None:
        raise NotFoundError('Student not found.')

    kept = keep_recent_results(student.game_results)
    student = repository.replace_game_results(student_id, kept)
    logger.info('Faculty %s pruned game results for student %s', faculty.email, student_id)

    return ClearedStudentResponse(
        message=f'Game results cleared (kept last {RECENT_RESULTS_PER_GAME} attempts per game)',
        student=StudentResponse.model_validate(student),
    )


@router.post('/clear-game-results/{student_id}/{game_name}', response_model=ClearedStudentResponse)
def clear_game_results_for_game(
    student_id: str,
    game_name: str,
    faculty: FacultyIdentity = Depends(require_faculty),
    repository: StudentRepository = Depends(get_repository),
):
    student = repository.find_by_id(student_id)
    if student is None:
        raise NotFoundError('Student not found.')

    remaining = drop_game_results(student.game_results, game_name)
    student = repository.replace_game_results(student_id, remaining)
    logger.info('Faculty %s cleared %s results for student %s', faculty.email, game_name, student_id)

    return ClearedStudentResponse(
        message=f'All {game_name} results cleared',
        student=StudentResponse.model_validate(student),
    )
