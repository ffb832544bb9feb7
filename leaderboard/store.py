"""
Ranking store: durable, append-only score submissions partitioned by game.

Owns the SQLAlchemy engine and session factory. Every public method runs in
its own short-lived session and turns ``SQLAlchemyError`` into
``StorageError``.
"""

import logging

from sqlalchemy import create_engine, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from leaderboard.errors import StorageError
from leaderboard.models import Base, Ranking
from leaderboard.schemas import RankingRecord

logger = logging.getLogger(__name__)

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_rankings_game_score ON rankings (game_id, score DESC, created_at ASC)",
    "CREATE INDEX IF NOT EXISTS idx_rankings_game_created ON rankings (game_id, created_at DESC)",
]


class RankingStore:
    """Insert and ordered reads over the ``rankings`` table."""

    def __init__(self, database_url: str, **engine_kwargs):
        if database_url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        else:
            engine_kwargs.setdefault("pool_size", 20)
            engine_kwargs.setdefault("max_overflow", 10)
        self.engine = create_engine(database_url, pool_pre_ping=True, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    # ── Lifecycle ────────────────────────────────────────────────

    def init_schema(self):
        """Check connectivity, then create the table and indexes if missing."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("✓ Database connected successfully")

            Base.metadata.create_all(bind=self.engine)
            with self.engine.connect() as conn:
                for stmt in _INDEXES:
                    conn.execute(text(stmt))
                conn.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"schema initialization failed: {exc}") from exc
        logger.info("✓ Database tables and indexes ensured")

    def dispose(self):
        self.engine.dispose()
        logger.info("Database connections closed")

    # ── Writes ───────────────────────────────────────────────────

    def insert(self, game_id: str, name: str, score: int) -> RankingRecord:
        """Append a submission and return it with its generated id and timestamp."""
        with self.SessionLocal() as db:
            try:
                row = Ranking(game_id=game_id, name=name, score=score)
                db.add(row)
                db.commit()
                db.refresh(row)
                return RankingRecord.model_validate(row)
            except (SQLAlchemyError, OverflowError) as exc:
                db.rollback()
                raise StorageError(f"insert failed: {exc}") from exc

    # ── Reads ────────────────────────────────────────────────────

    def top_by_score(self, game_id: str, limit: int) -> list[RankingRecord]:
        """Score descending; earlier submission wins ties."""
        stmt = (
            select(Ranking)
            .where(Ranking.game_id == game_id)
            .order_by(Ranking.score.desc(), Ranking.created_at.asc(), Ranking.id.asc())
            .limit(limit)
        )
        return self._fetch(stmt)

    def latest_by_time(self, game_id: str, limit: int) -> list[RankingRecord]:
        """Most recent first."""
        stmt = (
            select(Ranking)
            .where(Ranking.game_id == game_id)
            .order_by(Ranking.created_at.desc(), Ranking.id.desc())
            .limit(limit)
        )
        return self._fetch(stmt)

    def _fetch(self, stmt) -> list[RankingRecord]:
        with self.SessionLocal() as db:
            try:
                rows = db.execute(stmt).scalars().all()
            except SQLAlchemyError as exc:
                raise StorageError(f"query failed: {exc}") from exc
            return [RankingRecord.model_validate(r) for r in rows]
