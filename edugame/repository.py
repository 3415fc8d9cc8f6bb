import logging
from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from edugame.core.errors import DuplicateEmailError, NotFoundError, StorageError
from edugame.models.game_result import GameResult
from edugame.models.student import Student

logger = logging.getLogger(__name__)


class StudentRepository:
    """Data access for students and their embedded game results."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _storage_failure(self, action: str, exc: SQLAlchemyError) -> StorageError:
        self.db.rollback()
        logger.exception('Storage failure while %s', action)
        return StorageError()

    def find_by_email(self, email: str) -> Student | None:
        try:
            return self.db.query(Student).filter(Student.email == email).first()
        except SQLAlchemyError as exc:
            raise self._storage_failure('looking up student by email', exc) from exc

    def find_by_id(self, student_id: str) -> Student | None:
        try:
            return self.db.query(Student).filter(Student.id == student_id).first()
        except SQLAlchemyError as exc:
            raise self._storage_failure('looking up student by id', exc) from exc

    def insert(self, student: Student) -> Student:
        if self.find_by_email(student.email) is not None:
            raise DuplicateEmailError()

        try:
            self.db.add(student)
            self.db.commit()
            self.db.refresh(student)
        except IntegrityError as exc:
            # A concurrent registration won the unique index.
            self.db.rollback()
            raise DuplicateEmailError() from exc
        except SQLAlchemyError as exc:
            raise self._storage_failure('inserting student', exc) from exc

        return student

    def list_by_role(self, role: str) -> list[Student]:
        try:
            return (
                self.db.query(Student)
                .options(selectinload(Student.game_results))
                .filter(Student.role == role)
                .order_by(Student.created_at.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._storage_failure('listing students', exc) from exc

    def append_game_result(self, email: str, result: GameResult) -> GameResult:
        try:
            student_id = self.db.query(Student.id).filter(Student.email == email).scalar()
            if student_id is None:
                raise NotFoundError('Student not found.')

            # Single-row insert; the existing list is never read back and rewritten.
            result.student_id = student_id
            self.db.add(result)
            self.db.commit()
            self.db.refresh(result)
        except SQLAlchemyError as exc:
            raise self._storage_failure('saving game result', exc) from exc

        return result

    def replace_game_results(self, student_id: str, results: Iterable[GameResult]) -> Student:
        try:
            student = self.db.query(Student).filter(Student.id == student_id).first()
            if student is None:
                raise NotFoundError('Student not found.')

            # Fresh rows so the new ids follow the order of ``results``.
            replacements = [
                GameResult(
                    game_name=result.game_name,
                    score=result.score,
                    completion_time=result.completion_time,
                    total_questions=result.total_questions,
                    accuracy=result.accuracy,
                    date=result.date,
                )
                for result in results
            ]
            student.game_results = []
            self.db.flush()
            student.game_results = replacements
            self.db.commit()
            self.db.refresh(student)
        except SQLAlchemyError as exc:
            raise self._storage_failure('replacing game results', exc) from exc

        return student
