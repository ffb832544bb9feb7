"""Game leaderboard backend: score submissions and per-game rankings."""

__version__ = "1.0.0"
