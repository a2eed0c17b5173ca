"""FastAPI main application."""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ledger import __version__
from ledger.api import transactions_router
from ledger.config import Settings, settings as default_settings
from ledger.errors import LedgerError, StoreError, ValidationError, describe_validation_errors
from ledger.logging_config import configure_logging
from ledger.models.summary import HealthResponse
from ledger.services.transactions import TransactionQueryService
from ledger.storage.database import TransactionStore

logger = logging.getLogger(__name__)


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Translate a LedgerError into its status code and JSON payload."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            exc_info=exc,
            extra={"method": request.method, "path": request.url.path},
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body, path and query typing failures are client errors (400)."""
    error = ValidationError(describe_validation_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"method": request.method, "path": request.url.path})
    return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    The transaction store is opened once when the application starts and
    shared with every handler through ``app.state``.

    Args:
        app_settings: Settings to use; defaults to the environment-derived ones

    Returns:
        Configured FastAPI instance
    """
    cfg = app_settings or default_settings
    configure_logging(cfg.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = TransactionStore(cfg.database_path)
        app.state.store = store
        app.state.query_service = TransactionQueryService(
            store, default_page_size=cfg.default_page_size
        )
        logger.info("Application started", extra={"database_path": cfg.database_path})
        yield
        logger.info("Application stopped")

    app = FastAPI(
        title=cfg.app_name,
        debug=cfg.debug,
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": cfg.app_name, "version": __version__}

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request):
        """Report whether the database answers."""
        try:
            request.app.state.store.ping()
        except StoreError as e:
            return JSONResponse(
                status_code=503,
                content={"status": "error", "database": e.message},
            )
        return HealthResponse(status="ok", database="ok")

    app.include_router(transactions_router, prefix="/transactions", tags=["transactions"])
    return app


app = create_app()


def run():
    """Serve the application with uvicorn."""
    import uvicorn
    uvicorn.run(
        "ledger.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
