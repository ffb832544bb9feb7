"""
SQLAlchemy ORM models for the game leaderboard.
Tables: rankings
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

GAME_ID_MAX_LENGTH = 50
NAME_MAX_LENGTH = 30


class Ranking(Base):
    """One score submission. Rows are append-only."""

    __tablename__ = "rankings"
    __table_args__ = (CheckConstraint("score >= 0", name="ck_rankings_score_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(String(GAME_ID_MAX_LENGTH), nullable=False)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    score = Column(Integer, nullable=False)
    # naive local time, like the submitting server's clock
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self):
        return f"<Ranking(id={self.id}, game_id='{self.game_id}', name='{self.name}', score={self.score})>"
