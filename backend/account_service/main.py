import logging
from contextlib import asynccontextmanager
from typing import Optional
import redis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from account_service.core.config import Settings, settings as default_settings
from account_service.core.database import build_engine, build_session_factory, init_db
from account_service.api.handlers import register_exception_handlers
from account_service.api.routes import users

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    redis_client: Optional[redis.Redis] = None,
) -> FastAPI:
    """
    Build the application with its own database engine and Redis client.

    The handles are kept on app.state and reach the service through
    dependencies; tests pass their own engine and Redis client here.
    """
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers, so the level
    # from these settings is applied explicitly
    logging.getLogger().setLevel(settings.LOG_LEVEL)

    engine = engine or build_engine(settings.DATABASE_URL)
    if redis_client is None:
        # decode_responses=True so cached profiles come back as str
        redis_client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: create tables if they don't exist
        Shutdown: release Redis and database connections
        """
        # In production, use migrations (Alembic) instead of create_all
        init_db(app.state.engine)
        logger.info("Account service started")
        yield
        app.state.redis.close()
        app.state.engine.dispose()
        logger.info("Account service stopped")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.redis = redis_client

    # CORS middleware - allows frontend to make requests to backend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(users.router, prefix=API_PREFIX)

    @app.get("/health")
    async def health():
        """Health check endpoint - used by monitoring/deployment tools"""
        return {"status": "healthy"}

    return app


app = create_app()
