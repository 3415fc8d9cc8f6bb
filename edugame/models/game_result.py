"""Game result model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from edugame.database import Base


class GameResult(Base):
    """One finished game, owned by exactly one student.

    Rows are only ever inserted or deleted; ``id`` records append order.
    """
    __tablename__ = "game_results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(String(32), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    game_name = Column(String, nullable=False)
    score = Column(Float, nullable=False)
    completion_time = Column(Float, nullable=False)  # seconds
    total_questions = Column(Integer, nullable=False)
    accuracy = Column(Float)  # percentage
    date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    student = relationship("Student", back_populates="game_results")
