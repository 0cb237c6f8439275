"""Insider Risk Index service entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from insider_risk_index.adapters.database import (
    create_engine,
    create_session_factory,
    create_tables,
)
from insider_risk_index.adapters.rate_limiter import TokenBucketRateLimiter
from insider_risk_index.api.routes.assessment import (
    READ_SCOPE,
    SUBMIT_SCOPE,
    benchmarks_router,
    router,
)
from insider_risk_index.observability import configure_logging, get_logger
from insider_risk_index.settings import Settings, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        None
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level, json_logs=settings.log_json)

    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    if settings.create_tables_on_startup:
        await create_tables(engine)

    logger.info("Service started", service=settings.service_name, version=settings.version)
    yield

    await engine.dispose()
    logger.info("Service stopped", service=settings.service_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use. Defaults to ``get_settings()``.

    Returns:
        The configured application with routers and rate limiters attached.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.service_name,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_limiters = {
        SUBMIT_SCOPE: TokenBucketRateLimiter(settings.rate_limit_submit_per_minute),
        READ_SCOPE: TokenBucketRateLimiter(settings.rate_limit_read_per_minute),
    }

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(router, prefix="/api/v1")
    app.include_router(benchmarks_router, prefix="/api/v1")
    return app


app: FastAPI = create_app()
