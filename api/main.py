# api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import books, extract, notes
from api.schemas import HealthResponse
from core.config import settings
from core.errors import ConflictError, ExtractionError, NotFoundError, ProviderError, ValidationError
from core.logging_config import setup_logging
from core.providers.extraction import TextExtractor
from core.providers.search import BookSearchProvider
from core.storage import Storage

logger = logging.getLogger(__name__)


def _request_errors(exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(loc) or "body",
            "message": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        })
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Map the application's error taxonomy onto HTTP responses."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request data", "errors": _request_errors(exc)},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": exc.message, "errors": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": str(exc)})

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"message": str(exc)})

    @app.exception_handler(ProviderError)
    async def provider_handler(request: Request, exc: ProviderError):
        message = str(exc) if isinstance(exc, ExtractionError) else "External service error"
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": message})

    @app.exception_handler(Exception)
    async def unexpected_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Unexpected server error", "error": str(exc)},
        )


def create_app(
    storage: Optional[Storage] = None,
    search_provider: Optional[BookSearchProvider] = None,
    text_extractor: Optional[TextExtractor] = None,
) -> FastAPI:
    """Build the application.

    Collaborators default to the ones described by the settings; tests pass
    their own.
    """
    storage = storage or Storage()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        storage.init()
        with storage.service() as service:
            user = service.ensure_user(settings.default_username, settings.default_password)
            logger.info("Serving library for user '%s' (id=%s)", user.username, user.id)
        try:
            yield
        finally:
            storage.close()

    app = FastAPI(title="Reading Log API", lifespan=lifespan)
    app.state.storage = storage
    app.state.search_provider = search_provider or BookSearchProvider()
    app.state.text_extractor = text_extractor or TextExtractor()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(books.router)
    app.include_router(notes.router)
    app.include_router(extract.router)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", storage=storage.backend)

    return app


app = create_app()

# Main execution
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,  # Enable auto-reload
        reload_dirs=["api", "core"]  # Watch both api and core directories for changes
    )
