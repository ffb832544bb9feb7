"""
Error kinds raised by the store and the service.

Each carries the human-readable ``message`` that ends up in the
``{"message": ...}`` response body.
"""


class LeaderboardError(Exception):
    """Base class for leaderboard failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LeaderboardError):
    """Malformed or missing client input (400)."""


class StorageError(LeaderboardError):
    """The underlying database failed; never shown to clients."""


class ServiceError(LeaderboardError):
    """Generic server-side failure reported to clients (500)."""

    def __init__(self, message: str = "server error"):
        super().__init__(message)
