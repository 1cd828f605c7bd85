"""User accounts."""

import enum
from typing import Any, Dict, Optional

from webgis.models.base import RecordModel

ID_PREFIX = "U"


class UserRole(str, enum.Enum):
    """Account roles. Only a direct store edit promotes a member."""
    MEMBER = "member"
    ADMIN = "admin"


class User(RecordModel):
    """A registered account."""

    full_name: str
    email: str
    role: UserRole = UserRole.MEMBER
    password_hash: Optional[str] = None
    # Plaintext secret from stores written before hashing; upgraded on login.
    password: Optional[str] = None

    def to_public(self) -> Dict[str, Any]:
        """Sanitized view: no secret of any kind leaves the server."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"password", "password_hash"},
        )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email} ({self.role.value})>"
