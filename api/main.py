"""
ClientBook - client and insurance policy manager
FastAPI Application Entry Point

Run with:

    uvicorn api.main:app --host 127.0.0.1 --port 8000
"""
# Load environment variables from .env file first, before any imports
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.routes import clients
from api.services.errors import DuplicateEntryError, InvalidArgumentError, NotFoundError
from api.services.model_loader import init_model
from api.services.storage import JsonAddressBookStorage, JsonUserPrefsStorage, StorageManager
from config.settings import Settings, settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Save user preferences on shutdown."""
    logger.info(f"ClientBook started with {len(app.state.model.get_address_book())} clients")

    yield  # Application runs here

    try:
        app.state.storage.save_user_prefs(app.state.model.get_user_prefs())
        logger.info("Saved user preferences")
    except OSError as e:
        logger.error(f"Failed to save user preferences: {e}")


def create_app(app_settings: Optional[Settings] = None,
               clock: Callable[[], date] = date.today) -> FastAPI:
    """
    Build the FastAPI app with its model and storage.

    The model and storage live on app.state and reach route handlers
    through FastAPI dependencies.
    """
    app_settings = app_settings or settings
    storage = StorageManager(
        JsonAddressBookStorage(app_settings.data_path),
        JsonUserPrefsStorage(app_settings.prefs_path),
    )

    app = FastAPI(
        title="ClientBook",
        description="Contact and insurance policy manager for financial advisors",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.storage = storage
    app.state.model = init_model(storage, app_settings, clock=clock)

    app.include_router(clients.router)

    @app.exception_handler(DuplicateEntryError)
    async def duplicate_entry_handler(request: Request, exc: DuplicateEntryError):
        return JSONResponse(status_code=409, content={"error": "Duplicate entry", "detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": "Not found", "detail": str(exc)})

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
        return JSONResponse(status_code=400, content={"error": "Invalid argument", "detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Convert validation errors to 400 with clear messages."""
        sanitized_errors = []
        for error in exc.errors():
            sanitized = dict(error)
            if "input" in sanitized and isinstance(sanitized["input"], bytes):
                sanitized["input"] = sanitized["input"].decode("utf-8", errors="replace")
            # ctx may hold exception objects that are not JSON serializable
            if "ctx" in sanitized:
                sanitized["ctx"] = {k: str(v) for k, v in sanitized["ctx"].items()}
            sanitized_errors.append(sanitized)
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "detail": sanitized_errors}
        )

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "clients": len(app.state.model.get_address_book())}

    return app


app = create_app()
