"""Domain error taxonomy mapped onto HTTP status codes."""

from typing import Optional

from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)


class WebGISError(Exception):
    """Base class for errors that are reported to the client as an envelope."""

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal_error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(WebGISError):
    """A required field is missing or empty."""
    status_code = HTTP_400_BAD_REQUEST
    default_message = "invalid_request"


class AuthError(WebGISError):
    """Credentials did not match a stored user."""
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "invalid_credentials"


class NotFoundError(WebGISError):
    """A referenced record does not exist."""
    status_code = HTTP_404_NOT_FOUND
    default_message = "not_found"


class ConflictError(WebGISError):
    """A unique key is already taken."""
    status_code = HTTP_409_CONFLICT
    default_message = "conflict"


class InternalError(WebGISError):
    """I/O or parse failure. The message is logged, never sent to the client."""
    status_code = HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(WebGISError):
    """An external service (geocoder) failed."""
    status_code = HTTP_502_BAD_GATEWAY
    default_message = "upstream_error"
