"""
BrewPOS backend - application entry point
Point-of-sale API for a small coffee shop.

Modules:
- Sign up / sign in with server-side sessions and roles
- Menu management
- Per-session cart and order checkout
- Daily sales statistics and admin dashboard
- Operation log
- Customer chat assistant

Stack: FastAPI + DuckDB + JWT
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .config.settings import Settings, settings as default_settings
from .core.database import DatabaseManager, db_manager
from .core.error_handler import (
    application_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .core.exceptions import BaseApplicationError, PersistenceError
from .core.logger import get_logger, setup_logger
from .core.security import SecurityManager
from .core.session import SessionRegistry, session_registry

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database and bootstrap the schema on startup"""
    try:
        app.state.db.init_database()
    except PersistenceError as e:
        # Keep serving; the next query opens the connection again
        logger.error("Database initialization failed: %s", e.message)

    yield

    app.state.db.close()


def create_app(db: Optional[DatabaseManager] = None,
               sessions: Optional[SessionRegistry] = None,
               config: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application"""
    config = config or default_settings
    setup_logger(config.log_dir, config.log_level)

    app = FastAPI(
        title=config.api_title,
        version=config.api_version,
        description="Coffee shop point-of-sale API",
        debug=config.debug,
        lifespan=lifespan
    )
    app.state.db = db or db_manager
    app.state.sessions = sessions or session_registry
    app.state.config = config
    app.state.security = SecurityManager(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BaseApplicationError, application_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=config.api_prefix)

    @app.get("/health")
    async def health_check():
        try:
            app.state.db.execute_one("SELECT 1")
            database = "connected"
        except PersistenceError as e:
            return {
                "status": "unhealthy",
                "version": config.api_version,
                "database": f"error: {e.message}"
            }
        return {
            "status": "healthy",
            "version": config.api_version,
            "database": database,
            "active_sessions": app.state.sessions.active_count()
        }

    @app.get("/")
    async def root():
        return {
            "name": config.api_title,
            "version": config.api_version,
            "description": "Coffee shop point-of-sale API"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
