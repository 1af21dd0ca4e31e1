"""
FastAPI Main Application

Pod Curious backend: episode analysis, chat relay and playlist generation.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

from core.config import Settings
from core.errors import PodCuriousError

# Load environment variables from .env.local
load_dotenv('.env.local')


def setup_logging(log_level: str) -> Path:
    """
    Configure root logging with a rotating file handler and the console

    Args:
        log_level: Level name, e.g. 'INFO'

    Returns:
        Path of the log file
    """
    logs_dir = Path(__file__).parent.parent / 'logs'
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / 'backend.log'

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10_000_000,  # 10MB per file
        backupCount=5,
        encoding='utf-8'
    )
    console_handler = logging.StreamHandler()

    log_format = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    file_handler.setFormatter(log_format)
    console_handler.setFormatter(log_format)

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[file_handler, console_handler]
    )
    return log_file


logger = logging.getLogger(__name__)

# Import routes
from app.middleware.cors import CORS_HEADERS, cors_middleware
from app.routes import analyze, chat, playlist, static


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for startup and shutdown"""
    settings: Settings = app.state.settings
    logger.info(f"🎧 Pod Curious running on port {settings.port}")

    if not settings.anthropic_configured:
        logger.warning("⚠️ No ANTHROPIC_API_KEY set")
    if settings.listen_notes_configured:
        logger.info("✅ Listen Notes API connected")
    else:
        logger.info("ℹ️ No LISTEN_NOTES_KEY, episode lookup and playlist links disabled")

    yield

    logger.info("👋 Shutting down Pod Curious")


async def pod_curious_error_handler(request: Request, exc: PodCuriousError):
    """Turn service errors into a uniform {error} payload"""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed or non-JSON request bodies are client errors"""
    logger.warning(f"⚠️ Invalid request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
        headers=CORS_HEADERS
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Settings to use (read from the environment when omitted)

    Returns:
        Configured FastAPI app
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Pod Curious API",
        description="Podcast episode analysis, chat and playlist generation",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings

    app.middleware("http")(cors_middleware)

    app.add_exception_handler(PodCuriousError, pod_curious_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(analyze.router, prefix="/api", tags=["analyze"])
    app.include_router(chat.router, prefix="/api", tags=["chat"])
    app.include_router(playlist.router, prefix="/api", tags=["playlist"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "anthropic_configured": settings.anthropic_configured,
            "listen_notes_configured": settings.listen_notes_configured,
        }

    # Catch-all static route goes last
    app.include_router(static.router)

    return app


_settings = Settings.from_env()
log_file = setup_logging(_settings.log_level)
logger.info(f"Logging to file: {log_file}")

app = create_app(_settings)


def run():
    """Console entry point"""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=_settings.port)


if __name__ == "__main__":
    run()
