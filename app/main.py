"""
Employee Records Service - Main Application Entry Point.

This service manages employee records collected by the employee form:
- Listing all employee records
- Creating records with unique employee ID and email
- Updating and deleting records by employee ID
- Publishing the field validation rules the form relies on
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes.employees import router as employees_router
from app.core.config import settings
from app.core.database import create_db_and_tables
from app.core.exceptions import EmployeeServiceError, EmployeeValidationError
from app.core.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Employee Records Service...")

    logger.info("Creating database and tables...")
    create_db_and_tables()
    logger.info("Database and tables created successfully")

    logger.info("Employee Records Service startup complete")

    yield

    # Shutdown
    logger.info("Employee Records Service shutdown complete")


# Initialize FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Employee Records Service - Validates and stores employee records",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)


# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.exception_handler(EmployeeValidationError)
async def validation_error_handler(request: Request, exc: EmployeeValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "errors": exc.errors},
    )


@app.exception_handler(EmployeeServiceError)
async def service_error_handler(request: Request, exc: EmployeeServiceError):
    if exc.status_code >= 500:
        logger.error(f"Failed {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


# Include routers
app.include_router(employees_router, prefix=settings.API_PREFIX)


# Health check endpoint
@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint for container orchestration and monitoring.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/", tags=["root"])
async def root():
    """
    Root endpoint with service information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }
