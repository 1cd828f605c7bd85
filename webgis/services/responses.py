"""Response Workflow and the notification queries derived from it."""

import logging
from typing import List, Optional

from webgis.errors import ConflictError, NotFoundError, ValidationError
from webgis.models import (
    ANONYMOUS_USER_ID,
    DEFAULT_ADMIN_ID,
    FeedbackStatus,
    Response,
    new_id,
)
from webgis.models.response import ID_PREFIX
from webgis.storage import FEEDBACKS, RESPONSES, RecordStore

logger = logging.getLogger("WebGIS.responses")


class ResponseWorkflow:
    """Attaches operator responses to feedback and tracks their read state."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def respond(
        self,
        feedback_id: str,
        admin_id: Optional[str],
        content: Optional[str],
    ) -> Response:
        """
        Create the response for ``feedback_id`` and mark the feedback responded.

        Both collections stay locked for the whole step. The response is
        persisted first; the feedback status write comes second and is
        redundant with the status derived on read.
        """
        content = (content or "").strip()
        if not content:
            raise ValidationError("content is required")

        async with self.store.transaction(FEEDBACKS, RESPONSES):
            feedbacks = await self.store.read(FEEDBACKS)
            feedback = next((f for f in feedbacks if f.get("id") == feedback_id), None)
            if feedback is None:
                raise NotFoundError("feedback_not_found")

            responses = await self.store.read(RESPONSES)
            if any(r.get("feedbackId") == feedback_id for r in responses):
                raise ConflictError("feedback_already_responded")

            response = Response(
                id=new_id(ID_PREFIX),
                feedback_id=feedback_id,
                user_id=str(feedback.get("userId") or ANONYMOUS_USER_ID),
                admin_id=admin_id or DEFAULT_ADMIN_ID,
                content=content,
                is_read=False,
            )
            responses.append(response.to_record())
            await self.store.write(RESPONSES, responses)

            feedback["status"] = FeedbackStatus.RESPONDED.value
            await self.store.write(FEEDBACKS, feedbacks)

        logger.info(f"Response {response.id} attached to feedback {feedback_id} by {response.admin_id}")
        return response

    async def mark_read(self, response_id: str) -> Response:
        """Mark a response read. Already-read responses are returned unchanged."""
        async with self.store.transaction(RESPONSES):
            responses = await self.store.read(RESPONSES)
            record = next((r for r in responses if r.get("id") == response_id), None)
            if record is None:
                raise NotFoundError("response_not_found")

            if not record.get("isRead"):
                record["isRead"] = True
                await self.store.write(RESPONSES, responses)
                logger.info(f"Response {response_id} marked read")

        return Response.model_validate(record)

    async def list_all(self) -> List[Response]:
        return [Response.model_validate(r) for r in await self.store.read(RESPONSES)]

    async def list_for_user(self, user_id: str) -> List[Response]:
        return [r for r in await self.list_all() if r.user_id == user_id]

    async def unread_count(self, user_id: str) -> int:
        """Unread responses addressed to ``user_id``; polled by the client."""
        return sum(1 for r in await self.list_for_user(user_id) if not r.is_read)
