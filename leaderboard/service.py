"""
Ranking service: validation, sanitization and the single store call per
request.

Handlers never touch the database directly; they receive a ``RankingStore``
at construction time. ``StorageError`` is logged here with full detail and
replaced by a generic ``ServiceError`` before it can reach a client.
"""

import logging
import math
import re
from typing import Any, Optional

from leaderboard.errors import ServiceError, StorageError, ValidationError
from leaderboard.models import GAME_ID_MAX_LENGTH, NAME_MAX_LENGTH
from leaderboard.schemas import RankingRecord
from leaderboard.store import RankingStore

logger = logging.getLogger(__name__)

MIN_LIMIT = 1
MAX_LIMIT = 200
DEFAULT_TOP_LIMIT = 50
DEFAULT_LATEST_LIMIT = 20

GAME_ID_REQUIRED = "game_id required"
NAME_REQUIRED = "name required"
SCORE_INVALID = "score must be non-negative integer"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_LEADING_INTEGER_RE = re.compile(r"[\s\ufeff]*([+-]?[0-9]+)")
_EDGE_SPACE_RE = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")


# ── Parsing helpers ──────────────────────────────────────────────

def trim(value: str) -> str:
    """Strip whitespace and byte-order marks from both ends."""
    return _EDGE_SPACE_RE.sub("", value)


def require_text(value: Any, message: str, max_length: Optional[int] = None) -> str:
    """Trim ``value`` and cap it at ``max_length``; blank or non-string is invalid."""
    if not isinstance(value, str) or not trim(value):
        raise ValidationError(message)
    return trim(value)[:max_length]


def parse_score(value: Any) -> int:
    """
    Turn a submitted score into a non-negative ``int``.

    Accepted: ints, floats with an integral value (``123.0``), and strings
    holding a plain decimal integer. Booleans, fractions, non-finite floats
    and anything else raise ``ValidationError``.
    """
    if isinstance(value, bool):
        raise ValidationError(SCORE_INVALID)

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValidationError(SCORE_INVALID)
        parsed = int(value)
    elif isinstance(value, str) and _INTEGER_RE.fullmatch(trim(value)):
        parsed = int(trim(value))
    else:
        raise ValidationError(SCORE_INVALID)

    if parsed < 0:
        raise ValidationError(SCORE_INVALID)
    return parsed


def parse_limit(value: Any, default: int) -> int:
    """
    Read a page size, falling back to ``default`` when it is not numeric,
    then clamp it to ``[MIN_LIMIT, MAX_LIMIT]``. Never raises.
    """
    limit = default
    if isinstance(value, bool) or value is None:
        pass
    elif isinstance(value, int):
        limit = value
    elif isinstance(value, float) and math.isfinite(value):
        limit = int(value)
    elif isinstance(value, str):
        match = _LEADING_INTEGER_RE.match(value)
        if match:
            limit = int(match.group(1))
    return min(max(limit, MIN_LIMIT), MAX_LIMIT)


# ── Service ──────────────────────────────────────────────────────

class RankingService:
    """Stateless request handlers over an injected ``RankingStore``."""

    def __init__(self, store: RankingStore):
        self.store = store

    def submit(self, game_id: Any, name: Any, score: Any) -> RankingRecord:
        clean_game_id = require_text(game_id, GAME_ID_REQUIRED, GAME_ID_MAX_LENGTH)
        clean_name = require_text(name, NAME_REQUIRED, NAME_MAX_LENGTH)
        clean_score = parse_score(score)

        try:
            record = self.store.insert(clean_game_id, clean_name, clean_score)
        except StorageError as exc:
            logger.error("submit failed for game %r: %s", clean_game_id, exc)
            raise ServiceError() from exc

        logger.info("Score %d submitted for %r in game %r (id=%d)",
                    record.score, record.name, record.game_id, record.id)
        return record

    def get_top_ranking(self, game_id: Any, limit: Any = None) -> list[RankingRecord]:
        clean_game_id = require_text(game_id, GAME_ID_REQUIRED)
        page = parse_limit(limit, DEFAULT_TOP_LIMIT)
        try:
            return self.store.top_by_score(clean_game_id, page)
        except StorageError as exc:
            logger.error("top ranking query failed for game %r: %s", clean_game_id, exc)
            raise ServiceError() from exc

    def get_latest(self, game_id: Any, limit: Any = None) -> list[RankingRecord]:
        clean_game_id = require_text(game_id, GAME_ID_REQUIRED)
        page = parse_limit(limit, DEFAULT_LATEST_LIMIT)
        try:
            return self.store.latest_by_time(clean_game_id, page)
        except StorageError as exc:
            logger.error("latest query failed for game %r: %s", clean_game_id, exc)
            raise ServiceError() from exc

    def health_check(self) -> dict:
        """Liveness only; the store is not consulted."""
        return {"ok": True}
