"""
FastAPI Application Entry Point.

Food Rescue Squad API
"""
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.auth.router import router as auth_router
from app.core.config import Settings, get_settings
from app.core.database import Database
from app.core.errors import setup_exception_handlers
from app.core.logging import configure_logging
from app.food.router import router as food_router
from app.volunteers.router import router as volunteers_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup: Create the database engine and tables
    Shutdown: Dispose of pooled connections
    """
    database = Database(app.state.settings)
    await database.create_db_and_tables()
    app.state.database = database
    logger.info("{} started", app.state.settings.app_name)
    yield
    await database.dispose()
    logger.info("Shutdown complete")


def create_application(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
## Food Rescue Squad API

Coordinates food donations between donors, receivers and volunteers.

### Features:
- **JWT Authentication** - Register and log in as donor, receiver or volunteer
- **Donations** - Donors post surplus food with a pickup address
- **Requests** - Receivers post food needs with a delivery address
- **Volunteers** - Volunteers record availability and preferred tasks
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    # Include routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(food_router, prefix="/api")
    app.include_router(volunteers_router, prefix="/api")

    @app.get("/", tags=["health"])
    async def root():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/health", tags=["health"])
    async def health_check():
        """Detailed health check endpoint."""
        return {
            "status": "healthy",
            "database": "connected" if getattr(app.state, "database", None) else "not initialized",
        }

    return app


app = create_application()


if __name__ == "__main__":
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
