import logging
from pathlib import Path
from typing import Optional, Union

from webgis import config

from litestar import Litestar, Request
from litestar.config.cors import CORSConfig
from litestar.datastructures import State
from litestar.di import Provide
from litestar.exceptions import HTTPException, SerializationException
from litestar.response import Response
from litestar.status_codes import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from webgis.api.dependencies import (
    provide_feedback_ledger,
    provide_response_workflow,
    provide_store,
    provide_user_directory,
)
from webgis.errors import InternalError, WebGISError
from webgis.routes import ROUTES
from webgis.storage import JsonFileStore, RecordStore
from webgis.utils.logging import debug_log, log_request_error

logging.basicConfig(
    level=logging.DEBUG if config.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger("WebGIS")

GENERIC_ERROR = InternalError.default_message


def error_response(message: str, status_code: int) -> Response:
    return Response(
        content={"ok": False, "error": message},
        status_code=status_code,
        media_type="application/json",
    )


# --- Exception handlers

def handle_domain_error(request: Request, exc: WebGISError) -> Response:
    """Known failures keep their message; internal ones are logged and masked."""
    if isinstance(exc, InternalError):
        log_request_error(request, exc, message="Internal error while handling request")
        return error_response(GENERIC_ERROR, exc.status_code)
    debug_log("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return error_response(exc.message, exc.status_code)


def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    """Framework errors (unknown route, bad body, wrong method) in the same envelope."""
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        log_request_error(request, exc)
        return error_response(GENERIC_ERROR, exc.status_code)
    return error_response(str(exc.detail), exc.status_code)


def handle_undecodable_body(request: Request, exc: SerializationException) -> Response:
    debug_log("%s %s: could not decode body: %s", request.method, request.url.path, exc)
    return error_response("invalid_json", HTTP_400_BAD_REQUEST)


def log_exceptions(request: Request, exc: Exception) -> Response:
    log_request_error(request, exc)
    return error_response(GENERIC_ERROR, HTTP_500_INTERNAL_SERVER_ERROR)


# --- Lifespan

async def ensure_data_store(app: Litestar) -> None:
    """Create the data directory and the collection files if missing."""
    await app.state.store.ensure_all()


# --- App factory

def create_app(
    data_dir: Optional[Union[str, Path]] = None,
    store: Optional[RecordStore] = None,
    bcrypt_rounds: Optional[int] = None,
) -> Litestar:
    """Build the application around ``store`` (JSON files in ``data_dir`` by default)."""
    if store is None:
        store = JsonFileStore(data_dir or config.DATA_DIR)
    logger.info(f"Record store: {type(store).__name__} {getattr(store, 'data_dir', '')}")

    return Litestar(
        route_handlers=ROUTES,
        debug=config.DEBUG,
        state=State({
            "store": store,
            "bcrypt_rounds": bcrypt_rounds or config.BCRYPT_ROUNDS,
        }),
        dependencies={
            "store": Provide(provide_store, sync_to_thread=False),
            "users": Provide(provide_user_directory, sync_to_thread=False),
            "feedback": Provide(provide_feedback_ledger, sync_to_thread=False),
            "responses": Provide(provide_response_workflow, sync_to_thread=False),
        },
        cors_config=CORSConfig(
            allow_origins=config.CORS_ORIGINS,
            allow_methods=["GET", "POST"],
        ),
        on_startup=[ensure_data_store],
        exception_handlers={
            WebGISError: handle_domain_error,
            HTTPException: handle_http_exception,
            SerializationException: handle_undecodable_body,
            Exception: log_exceptions,
        },
    )


logger.info(f"Starting app in {'DEBUG' if config.DEBUG else 'PRODUCTION'} mode")

app = create_app()
