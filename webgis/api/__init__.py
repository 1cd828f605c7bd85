"""WebGIS API routes."""

from webgis.api.auth import AuthController, UsersController
from webgis.api.feedback import FeedbackController, submit_feedback
from webgis.api.responses import ResponsesController
from webgis.api.geocode import GeocodeController
from webgis.api.websocket import websocket_handler

__all__ = [
    "AuthController",
    "UsersController",
    "FeedbackController",
    "submit_feedback",
    "ResponsesController",
    "GeocodeController",
    "websocket_handler",
]
