"""
Field Check-In Service - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from fieldcheckin.core.config import settings
from fieldcheckin.core.db import engine, Base
from fieldcheckin.core.errors import CheckInServiceError, InternalError
import fieldcheckin.models  # noqa: F401  register tables on Base.metadata
from fieldcheckin.api import routes_accounts, routes_events, routes_participants, routes_public
from fieldcheckin.utils.responses import error_response

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Field Check-In Service",
    description="Event attendance registration with identity verification",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(CheckInServiceError)
async def service_error_handler(request: Request, exc: CheckInServiceError):
    """Map domain errors to the error envelope"""
    if exc.status_code >= 500:
        # Full context stays in the server log; the caller gets the generic message
        logger.error(
            f"{exc.error_code} on {request.method} {request.url.path}: {exc.message} {exc.details or ''}",
            exc_info=exc,
        )
        return error_response(
            message=type(exc).default_message,
            error_code=exc.error_code,
            status_code=exc.status_code
        )

    return error_response(
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        status_code=exc.status_code
    )

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are reported as validation errors"""
    return error_response(
        message="Invalid request",
        error_code="VALIDATION_ERROR",
        details=exc.errors(),
        status_code=400
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Auth and routing errors in the standard envelope"""
    return error_response(
        message=str(exc.detail),
        error_code=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything unexpected is logged with its stack and reported generically"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(
        message=InternalError.default_message,
        error_code=InternalError.error_code,
        status_code=500
    )

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_accounts.router, prefix="/accounts", tags=["accounts"])
app.include_router(routes_events.router, prefix="/events", tags=["events"])
app.include_router(routes_participants.router, prefix="/participants", tags=["participants"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
