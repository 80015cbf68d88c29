"""
Main Application Entry Point
============================

Responsibilities:
- Initialize FastAPI application
- Configure logging and CORS
- Register API routers
- Set up exception handlers
- Provide health check endpoints

IMPORTANT:
    Database tables are managed via Alembic migrations and populated by
    the directory-sync process. This service only reads them.
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from crm_access.core.config import get_settings
from crm_access.core.exceptions import CRMAccessException
from crm_access.core.logging import LogContext, configure_logging, get_logger
from crm_access.db.session import check_database_connection
from crm_access.routes import permission_routes

settings = get_settings()

configure_logging()

# Initialize logger
logger = get_logger(__name__)


# =====================================
# Application Lifespan Handler
# =====================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.
    """
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    if not check_database_connection():
        logger.error("database_unavailable_on_startup")
    else:
        logger.info("database_connection_established")

    try:
        yield
    finally:
        logger.info("application_shutdown_complete")


# =====================================
# FastAPI App Initialization
# =====================================

app = FastAPI(
    title=settings.app_name,
    description="""
    CRM Record Access Service

    Computes which CRM users can view a record from the locally
    synchronized sharing rules, profiles and role hierarchy.
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
)


# =====================================
# Middleware
# =====================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind a request id to every log line emitted while serving the request."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    with LogContext(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# =====================================
# Exception Handlers
# =====================================

@app.exception_handler(CRMAccessException)
async def crm_access_exception_handler(request: Request, exc: CRMAccessException):
    """
    Convert resolver exceptions to HTTP responses.
    """
    logger.warning(
        "request_failed",
        exception_type=type(exc).__name__,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "message": exc.message,
            "details": exc.details,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors.
    """
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    logger.warning("request_validation_error", path=request.url.path, errors=errors)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Validation error",
            "details": {"errors": errors},
        },
    )


# =====================================
# Register Routers
# =====================================

app.include_router(permission_routes.router, prefix="/api/v1")


# =====================================
# Health Check Endpoints
# =====================================

@app.get("/", tags=["Health"], summary="Basic Health Check")
def health_check():
    """
    Basic health check endpoint.

    Returns:
        Service status information
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/health", tags=["Health"], summary="Detailed Health Check")
def detailed_health_check():
    """
    Detailed health check including database connectivity.
    """
    db_healthy = check_database_connection()

    return {
        "status": "healthy" if db_healthy else "degraded",
        "service": settings.app_name,
        "version": settings.app_version,
        "checks": {
            "database": "healthy" if db_healthy else "unhealthy",
        },
    }
