from litestar import get

from webgis.api import (
    AuthController,
    UsersController,
    FeedbackController,
    submit_feedback,
    ResponsesController,
    GeocodeController,
    websocket_handler,
)


@get("/health", sync_to_thread=False)
def health() -> dict:
    """Liveness probe."""
    return {"ok": True}


ROUTES = [
    health,
    AuthController,
    UsersController,
    FeedbackController,
    submit_feedback,
    ResponsesController,
    GeocodeController,
    websocket_handler,
]
