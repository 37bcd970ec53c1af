"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spec_manager.config import DEV_JWT_SECRET, settings
from spec_manager.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.is_production)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    from spec_manager.db.engine import create_db_engine, create_session_factory

    if settings.is_production and settings.jwt_secret == DEV_JWT_SECRET:
        logger.warning("JWT_SECRET is the development default; set a real secret in production")

    engine = create_db_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    # Auto-create tables for SQLite (local dev, no migrations)
    if settings.is_sqlite:
        from spec_manager.db.base import Base
        import spec_manager.db.models  # noqa: F401 register all ORM models

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite tables created (local mode)")

    if settings.is_sqlite or settings.seed_on_startup:
        from spec_manager.services.seed import seed_database

        async with session_factory() as seed_session:
            await seed_database(seed_session)
            await seed_session.commit()

    app.state.db_engine = engine
    app.state.db_session_factory = session_factory

    logger.info(
        "Spec manager API started (env=%s, db=%s)",
        settings.environment,
        "sqlite" if settings.is_sqlite else engine.url.get_backend_name(),
    )
    yield

    await engine.dispose()
    logger.info("Spec manager API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Spec Manager API",
        version="1.0.0",
        description="Procurement specification authoring: admin-defined form schema and per-user documents.",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    from spec_manager.api.middleware.auth import AuthMiddleware
    from spec_manager.api.middleware.rate_limit import setup_rate_limiter
    from spec_manager.api.middleware.trace_id import TraceIdMiddleware

    # Rate limiting runs innermost so its key function sees the authenticated user
    setup_rate_limiter(app)
    app.add_middleware(AuthMiddleware)
    app.add_middleware(TraceIdMiddleware)

    # CORS middleware for the React frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Trace-Id"],
    )

    # Register error handlers
    from spec_manager.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    # Import and mount routers
    from spec_manager.api.router import api_router, health_router
    app.include_router(health_router)
    app.include_router(api_router)

    return app


app = create_app()
