"""
Game Leaderboard — FastAPI Application Entry Point.

Provides a small leaderboard backend with:
  - Score submission per game, append-only
  - Top-score and most-recent views per game
  - A composite index for fast descending-score reads
  - CORS support for the browser frontend
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from leaderboard import __version__
from leaderboard.config import Settings, get_settings
from leaderboard.errors import ServiceError, StorageError, ValidationError
from leaderboard.limiter import build_limiter
from leaderboard.routes import build_router
from leaderboard.schemas import HealthResponse
from leaderboard.service import RankingService
from leaderboard.store import RankingStore

logger = logging.getLogger(__name__)


# ── Logging ──────────────────────────────────────────────────────

def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s │ %(levelname)-7s │ %(name)s │ %(message)s",
    )


# ── App Lifecycle ────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(application: FastAPI):
    """Startup / shutdown lifecycle handler."""
    store = application.state.store
    # Startup: refuse to serve without a working store
    try:
        store.init_schema()
    except StorageError as e:
        logger.error("✗ Database initialization failed: %s", e)
        raise

    yield  # ← app is running

    # Shutdown
    store.dispose()


# ── Error Handlers ───────────────────────────────────────────────

async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=400, content={"message": exc.message})


async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=500, content={"message": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": "invalid request body"})


# ── FastAPI App ──────────────────────────────────────────────────

def create_app(settings: Optional[Settings] = None, store: Optional[RankingStore] = None) -> FastAPI:
    """
    Build the application.

    The store is constructed here (or injected, for tests) and the service
    wrapping it is kept on ``app.state``; routes resolve it per request.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    store = store or RankingStore(settings.database_url)

    application = FastAPI(
        title="Game Leaderboard API",
        description="Per-game score submissions with top and latest rankings",
        version=__version__,
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.store = store
    application.state.service = RankingService(store)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    limiter = build_limiter(settings)
    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    application.add_exception_handler(ValidationError, validation_error_handler)
    application.add_exception_handler(ServiceError, service_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_error_handler)
    application.include_router(build_router(limiter, settings))

    # ── Health Check ─────────────────────────────────────────────

    @application.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check():
        """Simple liveness probe."""
        return application.state.service.health_check()

    return application


if __name__ == "__main__":
    import uvicorn

    cfg = get_settings()
    uvicorn.run("leaderboard.app:create_app", factory=True, host=cfg.host, port=cfg.port)
