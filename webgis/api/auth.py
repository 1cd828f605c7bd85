"""Account endpoints: registration, login and the user list."""

from typing import Optional

from litestar import Controller, get, post
from litestar.status_codes import HTTP_200_OK
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from webgis.services import UserDirectory


# --- Request Schemas ---

class RegisterRequest(BaseModel):
    """Request to create an account. Emptiness is checked by the directory."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Request to authenticate."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: Optional[str] = None
    password: Optional[str] = None


# --- Controllers ---

class AuthController(Controller):
    """Registration and login. No session is issued; clients keep the returned user."""

    path = "/api/auth"
    tags = ["auth"]

    @post("/register", status_code=HTTP_200_OK)
    async def register(self, data: RegisterRequest, users: UserDirectory) -> dict:
        user = await users.register(data.full_name, data.email, data.password)
        return {"ok": True, "user": user.to_public()}

    @post("/login", status_code=HTTP_200_OK)
    async def login(self, data: LoginRequest, users: UserDirectory) -> dict:
        user = await users.login(data.email, data.password)
        return {"ok": True, "user": user.to_public()}


class UsersController(Controller):
    """User listing for the admin panel."""

    path = "/api/users"
    tags = ["users"]

    @get("/")
    async def list_users(self, users: UserDirectory) -> dict:
        return {"ok": True, "users": [u.to_public() for u in await users.list()]}
