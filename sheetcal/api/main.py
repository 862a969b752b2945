"""
sheetcal API - FastAPI Application

Serves the weekly schedule stored in a Google spreadsheet.

Usage:
    uvicorn sheetcal.api.main:app --host 127.0.0.1 --port 8080 --reload

    Or run directly:
    python -m sheetcal.api.main
"""

import logging
from contextlib import asynccontextmanager

# Load .env file before anything else
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sheetcal import __version__
from sheetcal.api.models import ErrorResponse
from sheetcal.api.routes import build_api_router
from sheetcal.config import SheetCalConfig, load_config
from sheetcal.logging_config import setup_logging
from sheetcal.sheets.backends import GridBackend, create_backend
from sheetcal.sheets.mapper import EventSheetMapper


# Configure structured logging
setup_logging()
logger = logging.getLogger(__name__)


def create_app(config: SheetCalConfig | None = None, backend: GridBackend | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Settings; loaded from args/sheetcal.yaml and the environment if omitted
        backend: Grid backend to use instead of the configured one (tests pass
            an in-memory grid here)
    """
    if config is None:
        config = load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the storage client once and share it across requests."""
        logger.info("Starting sheetcal API...")

        grid_backend = backend or create_backend(config)
        app.state.mapper = EventSheetMapper(
            grid_backend,
            sheet_name=config.sheets.sheet_name,
            serialize_writes=config.mapper.serialize_writes,
            skip_blank_rows=config.mapper.skip_blank_rows,
        )
        logger.info(
            f"Serving sheet '{config.sheets.sheet_name}' from {grid_backend.backend_name} backend"
        )

        yield

        logger.info("Shutting down sheetcal API...")
        try:
            await grid_backend.aclose()
        except Exception as e:
            logger.warning(f"Error closing {grid_backend.backend_name} backend: {e}")

    app = FastAPI(
        title="sheetcal API",
        description="Weekly schedule backed by a spreadsheet",
        version=__version__,
        docs_url=f"{config.api.prefix}/docs",
        redoc_url=f"{config.api.prefix}/redoc",
        openapi_url=f"{config.api.prefix}/openapi.json",
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error Handlers
    # =========================================================================

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent format."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.detail, code=f"HTTP_{exc.status_code}").model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Unreadable or mistyped bodies count as missing fields."""
        logger.debug(f"Rejected request body for {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error="Missing required fields", code="HTTP_400").model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Internal server error", code="INTERNAL_ERROR").model_dump(),
        )

    # REST API routes
    app.include_router(build_api_router(config.api.prefix))

    return app


app = create_app()


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    api_config = app.state.config.api
    uvicorn.run(
        "sheetcal.api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=True,
        log_level="info",
    )
