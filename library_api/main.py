"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Each app owns its own PubSub channel (app.state.pubsub)

2. Lifespan Events
   - startup: log configuration, create tables for SQLite databases
   - shutdown: dispose of the database engine

3. Middleware Stack
   - CORS: Allow cross-origin requests from the configured frontends

4. Exception Handlers
   - Convert database errors outside GraphQL to HTTP 500 responses
   - Log errors for debugging
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from library_api.config import get_settings
from library_api.database import create_tables, engine
from library_api.dependencies import DbSession, PubSubDep
from library_api.graphql import create_graphql_router, graphql_ide_for
from library_api.services.pubsub import PubSub

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API version: {settings.api_version}")

    # SQLite databases are not managed by Alembic migrations
    if settings.is_sqlite:
        create_tables()
        logger.info("SQLite database tables created")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Library API

A GraphQL API for a small library of books and authors.

### Endpoints
- **/graphql**: queries, mutations and the bookAdded subscription
- **/health**: service status

### Authentication
Log in with the `login` mutation and send the returned token as
`Authorization: Bearer <token>`. Adding books and editing authors
require a token.
        """,
        version=settings.api_version,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Publish/Subscribe
    # -------------------------------------------------------------------------
    # One channel per application, injected into every GraphQL context
    app.state.pubsub = PubSub()

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # GraphQL Endpoint
    # -------------------------------------------------------------------------
    # Queries and mutations over HTTP, subscriptions over websocket,
    # both at /graphql.
    graphql_router = create_graphql_router()
    app.include_router(graphql_router, prefix="/graphql", tags=["GraphQL"])

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    def health_check(db: DbSession, pubsub: PubSubDep) -> dict:
        """
        Health check endpoint.

        Returns API status including database connectivity and the number
        of live subscriptions.
        """
        try:
            db.execute(text("SELECT 1"))
            database_healthy = True
        except SQLAlchemyError as e:
            logger.warning(f"Database health check failed: {e}")
            database_healthy = False

        return {
            "status": "healthy" if database_healthy else "degraded",
            "app": settings.app_name,
            "version": settings.api_version,
            "database": {"healthy": database_healthy},
            "graphql": {
                "endpoint": "/graphql",
                "ide_enabled": graphql_ide_for(settings) is not None,
            },
            "subscriptions": pubsub.get_stats(),
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "graphql": "/graphql",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn library_api.main:app
app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m library_api.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "library_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
