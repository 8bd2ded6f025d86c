"""
FastAPI Main Application
Options Tracker
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from .config import settings
from .database import init_db
from .dependencies import check_trade_store_config, uses_supabase
from .services.trade_store import TradeStoreError
from .utils.logging_config import setup_logging
from .routes import trades_router, web_router
from . import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown handler"""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}...")
    logger.info(f"Trade store backend: {settings.trade_store}")

    try:
        check_trade_store_config(settings)
    except TradeStoreError as e:
        logger.error(f"Invalid trade store configuration: {e}")
        raise

    # Local tables are only needed for the SQLAlchemy store
    if not uses_supabase(settings):
        try:
            await init_db()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    logger.info("Application startup complete")
    yield
    logger.info("Application shutdown complete")


def create_app(init_logging: bool = True) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        init_logging: Configure logging handlers (disabled in tests)

    Returns:
        FastAPI app
    """
    if init_logging:
        setup_logging(settings.log_level, settings.log_dir)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Manual options trade log with annualized return tracking",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(web_router)  # Web UI routes (HTML templates)
    app.include_router(trades_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "trade_store": settings.trade_store
        }

    # Error handlers
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
