"""Operator responses to feedback."""

from webgis.models.base import RecordModel

ID_PREFIX = "RES"
DEFAULT_ADMIN_ID = "admin"


class Response(RecordModel):
    """
    An operator's answer to one feedback item.

    ``user_id`` is copied from the feedback when the response is created and
    is never re-synced. ``is_read`` only ever goes from False to True.
    """

    feedback_id: str
    user_id: str
    admin_id: str = DEFAULT_ADMIN_ID
    content: str
    is_read: bool = False

    def __repr__(self) -> str:
        return f"<Response {self.id} to {self.feedback_id} (read={self.is_read})>"
