"""crewdesk — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from crewdesk.adapters.persistence.database import engine
from crewdesk.config import settings
from crewdesk.infrastructure.api.error_handlers import register_error_handlers
from crewdesk.infrastructure.api.routes_assignments import router as assignments_router
from crewdesk.infrastructure.api.routes_health import router as health_router
from crewdesk.infrastructure.api.routes_positions import router as positions_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="crewdesk — Personnel Assignment Service",
        description="Worker-to-position assignment lifecycle with conflict resolution and audit",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS for the dashboard front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(assignments_router, prefix="/api")
    app.include_router(positions_router, prefix="/api")

    return app


app = create_app()
