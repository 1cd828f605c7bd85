"""Feedback Ledger: member submissions and their status."""

import logging
from typing import List, Optional

import pydantic

from webgis.errors import ValidationError
from webgis.models import ANONYMOUS_USER_ID, Feedback, FeedbackStatus, new_id
from webgis.models.feedback import ID_PREFIX
from webgis.storage import FEEDBACKS, RESPONSES, RecordStore
from webgis.utils.logging import error_log

logger = logging.getLogger("WebGIS.feedback")


class FeedbackLedger:
    """Accepts feedback and lists it with its current status."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def submit(
        self,
        user_id: Optional[str],
        title: Optional[str],
        content: Optional[str],
    ) -> Feedback:
        title = (title or "").strip()
        content = (content or "").strip()
        if not title or not content:
            raise ValidationError("title/content is required")

        feedback = Feedback(
            id=new_id(ID_PREFIX),
            user_id=user_id or ANONYMOUS_USER_ID,
            title=title,
            content=content,
            status=FeedbackStatus.PENDING.value,
        )
        async with self.store.transaction(FEEDBACKS):
            records = await self.store.read(FEEDBACKS)
            records.append(feedback.to_record())
            await self.store.write(FEEDBACKS, records)

        logger.info(f"Feedback {feedback.id} submitted by {feedback.user_id}")
        return feedback

    async def list(self) -> List[Feedback]:
        """
        All feedback in insertion order.

        A feedback referenced by any stored response is reported as responded,
        whatever its stored status says. The response is written before the
        feedback status, so this covers a failure between the two writes.
        """
        records = await self.store.read(FEEDBACKS)
        answered = {r.get("feedbackId") for r in await self.store.read(RESPONSES)}

        items = []
        for record in records:
            try:
                feedback = Feedback.model_validate(record)
            except pydantic.ValidationError as e:
                feedback_id = record.get("id") if isinstance(record, dict) else None
                error_log("Skipping unreadable feedback record", exc=e, context={"feedback_id": feedback_id})
                continue
            if feedback.id in answered and feedback.status != FeedbackStatus.RESPONDED.value:
                logger.debug(f"Feedback {feedback.id} has a response but is stored as {feedback.status}")
                feedback.status = FeedbackStatus.RESPONDED.value
            items.append(feedback)
        return items

    async def list_for_user(self, user_id: str) -> List[Feedback]:
        return [f for f in await self.list() if f.user_id == user_id]
