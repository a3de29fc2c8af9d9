"""Main FastAPI application instance."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import get_settings
from api.routers import health, scripts
from core.exceptions import FilmForgeException, LLMException, ServiceUnavailableException
from core.models import ErrorDetail, ErrorResponse

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting FilmForge API v0.1.0 in %s environment", settings.env)
    logger.info("LLM provider: %s (%s)", settings.llm_provider.value, settings.llm_model)

    yield

    logger.info("Application shutdown complete")


app = FastAPI(
    title="FilmForge API",
    description="Screenplay generation and formatting for LLM-written scripts",
    version="0.1.0",
    docs_url="/docs" if settings.debug else None,  # Hide in production
    redoc_url="/redoc" if settings.debug else None,  # Hide in production
    openapi_url="/openapi.json" if settings.debug else None,  # Hide in production
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    max_age=600,
)


def _status_for(exc: FilmForgeException) -> int:
    if isinstance(exc, LLMException):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, ServiceUnavailableException):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_400_BAD_REQUEST


# Exception handlers
@app.exception_handler(FilmForgeException)
async def filmforge_exception_handler(request: Request, exc: FilmForgeException) -> JSONResponse:
    """Handle custom FilmForge exceptions."""
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error("%s: %s", exc.__class__.__name__, exc.message)

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=exc.__class__.__name__,
            message=exc.message,
            details=[ErrorDetail(field=k, message=str(v)) for k, v in exc.details.items()],
            request_id=request.headers.get("X-Request-ID"),
        ).model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors."""
    details = [
        ErrorDetail(
            field=".".join(str(loc) for loc in err["loc"]),
            message=err["msg"],
            error_code=err["type"],
        )
        for err in exc.errors()
    ]

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="ValidationError",
            message="Request validation failed",
            details=details,
            request_id=request.headers.get("X-Request-ID"),
        ).model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error("Unexpected error: %s", exc, exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="InternalServerError",
            message="An unexpected error occurred",
            request_id=request.headers.get("X-Request-ID"),
        ).model_dump(mode="json"),
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(scripts.router, prefix="/v1/scripts", tags=["Scripts"])


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint with API pointers."""
    return {
        "message": "FilmForge API v0.1.0",
        "docs": "/docs",
        "scripts": "/v1/scripts",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.api_host, port=settings.api_port)
