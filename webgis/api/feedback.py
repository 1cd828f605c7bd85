"""Feedback endpoints: submission, listing and operator responses."""

from typing import Optional

from litestar import Controller, get, post
from litestar.status_codes import HTTP_200_OK
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from webgis.api.websocket import notify_response_event
from webgis.services import FeedbackLedger, ResponseWorkflow


# --- Request Schemas ---

class SubmitFeedbackRequest(BaseModel):
    """Feedback from a member; anonymous when no user id is given."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    user_id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None


class RespondRequest(BaseModel):
    """An operator's answer to a feedback item."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    admin_id: Optional[str] = None
    content: Optional[str] = None


# --- Controllers ---

@post("/api/submit_feedback", status_code=HTTP_200_OK, tags=["feedback"])
async def submit_feedback(data: SubmitFeedbackRequest, feedback: FeedbackLedger) -> dict:
    """Submit feedback."""
    item = await feedback.submit(data.user_id, data.title, data.content)
    return {"ok": True, "feedback": item.to_public()}


class FeedbackController(Controller):
    """Feedback listing for the admin panel and the respond step."""

    path = "/api/feedback"
    tags = ["feedback"]

    @get("/")
    async def list_feedback(self, feedback: FeedbackLedger) -> dict:
        return {"ok": True, "feedbacks": [f.to_public() for f in await feedback.list()]}

    @get("/user/{user_id:str}")
    async def list_user_feedback(self, user_id: str, feedback: FeedbackLedger) -> dict:
        """Feedback submitted by one user."""
        items = await feedback.list_for_user(user_id)
        return {"ok": True, "feedbacks": [f.to_public() for f in items]}

    @post("/{feedback_id:str}/respond", status_code=HTTP_200_OK)
    async def respond(
        self,
        feedback_id: str,
        data: RespondRequest,
        responses: ResponseWorkflow,
    ) -> dict:
        """Attach a response to a feedback item and notify its author."""
        response = await responses.respond(feedback_id, data.admin_id, data.content)
        await notify_response_event("response_created", response, responses)
        return {"ok": True, "response": response.to_public()}
