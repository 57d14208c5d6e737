"""
Order Service - REST API
CRUD service for order records backed by a relational store
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from contextlib import asynccontextmanager
import logging
from datetime import datetime, timezone
from typing import Optional

from order_service.config import Settings, get_settings
from order_service.database import Database
from order_service.logging_config import configure_logging
from order_service.routers import orders
from order_service.utils.error_handler import register_exception_handlers

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting Order Service API...")
    database = Database(
        settings.effective_database_url,
        reset_schema=settings.is_test,
        echo=settings.debug,
    )
    app.state.database = database
    await database.connect()
    logger.info("Database connected successfully")

    yield

    # Shutdown
    logger.info("Shutting down Order Service API...")
    await database.close()
    logger.info("Database connection closed")

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application for the given settings"""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Order Service API",
        description="CRUD REST API for managing orders",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(orders.router, prefix="/orders", tags=["orders"])

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint"""
        return {
            "status": "healthy",
            "database": "connected" if request.app.state.database.is_connected else "disconnected",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    return app

app = create_app()

def run() -> None:
    """Serve the API; SIGINT/SIGTERM stop the listener, drain requests, then close the store"""
    settings = app.state.settings
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )

if __name__ == "__main__":
    run()
