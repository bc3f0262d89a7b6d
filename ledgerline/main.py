"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ledgerline import __version__
from ledgerline.config import settings
from ledgerline.api.router import api_router
from ledgerline.database import close_pool
from ledgerline.errors import LedgerlineError, ServiceError, public_message, status_for

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s %s started", settings.app_name, __version__)
    yield
    # Runs once the server has drained in-flight requests
    logger.info("closing primary and replica databases")
    close_pool()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="Financial item tracking with exact decimal analytics",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api")


@app.exception_handler(ServiceError)
@app.exception_handler(LedgerlineError)
async def domain_error_handler(request: Request, exc: Exception):
    """Map a domain error (possibly wrapped by a service) to a status code."""
    status_code = status_for(exc)
    message = public_message(exc)
    if message is None:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        message = INTERNAL_ERROR
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 with a readable message."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    message = "; ".join(problems) or "invalid request"
    logger.warning("%s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"detail": message})


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
