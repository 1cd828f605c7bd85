"""Response endpoints: per-user notifications and read tracking."""

from litestar import Controller, get, post
from litestar.status_codes import HTTP_200_OK

from webgis.api.websocket import notify_response_event
from webgis.services import ResponseWorkflow


class ResponsesController(Controller):
    """Responses for operators (all) and members (their own)."""

    path = "/api/responses"
    tags = ["responses"]

    @get("/")
    async def list_responses(self, responses: ResponseWorkflow) -> dict:
        return {"ok": True, "responses": [r.to_public() for r in await responses.list_all()]}

    @get("/user/{user_id:str}")
    async def list_user_responses(self, user_id: str, responses: ResponseWorkflow) -> dict:
        items = await responses.list_for_user(user_id)
        return {"ok": True, "responses": [r.to_public() for r in items]}

    @get("/user/{user_id:str}/unread")
    async def unread_count(self, user_id: str, responses: ResponseWorkflow) -> dict:
        """Unread badge count, polled by the header."""
        return {"ok": True, "unreadCount": await responses.unread_count(user_id)}

    @post("/{response_id:str}/read", status_code=HTTP_200_OK)
    async def mark_read(self, response_id: str, responses: ResponseWorkflow) -> dict:
        response = await responses.mark_read(response_id)
        await notify_response_event("response_read", response, responses)
        return {"ok": True, "response": response.to_public()}
