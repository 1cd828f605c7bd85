"""Feedback submitted by members."""

import enum

from webgis.models.base import RecordModel

ID_PREFIX = "FB"
ANONYMOUS_USER_ID = "anonymous"


class FeedbackStatus(str, enum.Enum):
    """Feedback lifecycle: pending until an operator responds."""
    PENDING = "pending"
    RESPONDED = "responded"


class Feedback(RecordModel):
    """
    A feedback item.

    ``status`` stays a plain string: records edited by hand or written by
    other tools may carry values outside ``FeedbackStatus`` and are listed as-is.
    """

    user_id: str = ANONYMOUS_USER_ID
    title: str
    content: str
    status: str = FeedbackStatus.PENDING.value

    def __repr__(self) -> str:
        return f"<Feedback {self.id} from {self.user_id} ({self.status})>"
