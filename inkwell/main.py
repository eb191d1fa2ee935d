"""
Main application entry point for the Inkwell API.

This module builds the FastAPI application: CORS, error handlers, routers,
and the database lifecycle.

Usage:
    - Direct: python -m inkwell.main
    - ASGI server: uvicorn inkwell.main:app
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inkwell.api import register_exception_handlers
from inkwell.assessments.router import router as assessments_router
from inkwell.common.db.session import Database
from inkwell.common.logger import app_logger, configure_logger
from inkwell.config import Settings, settings as default_settings
from inkwell.stories.router import router as stories_router
from inkwell.users.router import auth_router, users_router

logger = app_logger.getChild("main")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration to use; defaults to the environment-derived settings

    Returns:
        The FastAPI application. The database is opened on startup and
        closed on shutdown.
    """
    settings = settings or default_settings

    configure_logger(
        level=settings.LOG_LEVEL,
        use_json=settings.LOG_JSON,
        log_file=settings.LOG_FILE
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(
            settings.DATABASE_URL,
            echo=settings.SQL_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT
        )
        try:
            await database.ping()
            if settings.AUTO_CREATE_SCHEMA:
                await database.create_schema()
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            await database.dispose()
            raise

        app.state.database = database
        logger.info(f"{settings.PROJECT_NAME} v{settings.VERSION} startup complete")
        try:
            yield
        finally:
            await database.dispose()
            app.state.database = None
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="API for Inkwell users, stories and assessments",
        version=settings.VERSION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
        expose_headers=["Content-Length"],
        max_age=12 * 3600,
    )

    register_exception_handlers(app)

    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(users_router, prefix="/user", tags=["users"])
    app.include_router(assessments_router, prefix="/assessments", tags=["assessments"])
    app.include_router(stories_router, prefix="/stories", tags=["stories"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": f"Welcome to {settings.PROJECT_NAME} (v{settings.VERSION})"}

    logger.info(f"Application initialized with {len(app.routes)} routes")
    return app


app = create_app()


if __name__ == "__main__":
    from inkwell.scripts.run_server import main

    main()
