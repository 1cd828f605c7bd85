"""WebGIS record models."""

from webgis.models.base import RecordModel, new_id, utc_now
from webgis.models.user import User, UserRole
from webgis.models.feedback import Feedback, FeedbackStatus, ANONYMOUS_USER_ID
from webgis.models.response import Response, DEFAULT_ADMIN_ID

__all__ = [
    "RecordModel",
    "new_id",
    "utc_now",
    "User",
    "UserRole",
    "Feedback",
    "FeedbackStatus",
    "ANONYMOUS_USER_ID",
    "Response",
    "DEFAULT_ADMIN_ID",
]
