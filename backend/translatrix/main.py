"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from translatrix.api.routes import health, report, translate
from translatrix.config import settings
from translatrix.core.errors import TranslatrixError

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # LiteLLM and httpx are chatty at INFO
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging(settings.log_level)
    configured = [
        name for name in ("gemini", "anthropic", "openai", "openrouter")
        if settings.get_api_key(name)
    ]
    logger.info(
        "%s starting, providers with keys: %s (free fallback always available)",
        settings.app_name,
        ", ".join(configured) or "none",
    )
    yield


app = FastAPI(
    title=settings.app_name,
    description="Document translation with multi-provider fallback",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TranslatrixError)
async def translatrix_error_handler(request: Request, exc: TranslatrixError):
    """Render service errors as {success: false, error, details}."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "details": exc.details},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"success": False, "error": "Invalid request", "details": str(exc.errors())},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": str(exc) or "Internal server error", "details": None},
    )


# Include routers
app.include_router(translate.router, prefix="/api", tags=["translation"])
app.include_router(report.router, prefix="/api", tags=["report"])
app.include_router(health.router, prefix="/api", tags=["health"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": f"{settings.app_name} API", "version": "1.0.0"}


def run() -> None:
    """Console entry point."""
    import uvicorn

    configure_logging(settings.log_level)
    uvicorn.run("translatrix.main:app", host=settings.host, port=settings.port, reload=settings.debug)
