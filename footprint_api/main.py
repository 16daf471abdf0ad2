"""
Carbon Footprint API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from .config import get_settings
from .database import Base, engine
from .limiter import limiter
from .logging_config import api_logger
from .middleware import RequestLoggingMiddleware
from .responses import (
    api_exception_handler,
    rate_limit_exception_handler,
    validation_exception_handler,
)
from . import models  # noqa: F401  registers tables on Base.metadata
from .routes import activities_router, emissions_router

VERSION = "1.0.0"

# Fails fast when required configuration (CLIMATIQ_API_KEY) is missing
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    # In production, manage schema with migrations instead
    Base.metadata.create_all(bind=engine)
    api_logger.info(
        "Carbon Footprint API started",
        environment=settings.environment,
        provider_url=settings.climatiq_api_url,
        provider_timeout=settings.provider_timeout,
    )
    yield
    engine.dispose()


app = FastAPI(
    title="Carbon Footprint API",
    description="Records activities and estimates their CO2e emissions",
    version=VERSION,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)

# Error taxonomy: validation, not found, persistence, internal
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, api_exception_handler)
app.add_exception_handler(SQLAlchemyError, api_exception_handler)
app.add_exception_handler(Exception, api_exception_handler)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    max_age=3600,
)

# Routes
app.include_router(activities_router)
app.include_router(emissions_router)


@app.get("/api/health")
def health_check():
    """Health check endpoint for load balancers and monitoring."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "healthy"
    except Exception as e:
        api_logger.error("Database health check failed", error=e)
        database = "unhealthy"

    return {
        "status": "healthy" if database == "healthy" else "degraded",
        "environment": settings.environment,
        "version": VERSION,
        "database": database,
    }


@app.get("/")
def root():
    return {"status": "OK", "message": "Carbon Footprint API is running"}
