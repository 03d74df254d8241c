"""
FastAPI Application

Main entry point for the Sales Insights dataset API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import structlog

from src.config import get_settings
from src.config.logging import configure_logging
from src.serving.api.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from src.serving.api.routes import data_router, health_router
from src.serving.dataset import check_dataset_health

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()

    logger.info("Starting Sales Insights API")

    dataset_health = check_dataset_health()
    if dataset_health["status"] == "healthy":
        logger.info("Dataset available", path=dataset_health["path"])
    else:
        logger.warning("Dataset unavailable", path=dataset_health["path"])

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="Sales Insights API",
    description="Static order dataset API for the sales insights dashboard",
    version=settings.version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Compression
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Custom middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# API routes
app.include_router(data_router, prefix="/api", tags=["Data"])
app.include_router(health_router, prefix="/api/v1", tags=["Health"])


@app.get("/api/v1/info")
async def api_info():
    """API information endpoint."""
    return {
        "name": "Sales Insights API",
        "version": settings.version,
        "environment": settings.app_env,
        "documentation": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
