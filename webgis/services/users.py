"""User Directory: registration and login against the users collection."""

import logging
import secrets
from typing import List, Optional

import anyio
import bcrypt

from webgis.errors import AuthError, ConflictError, ValidationError
from webgis.models import User, UserRole, new_id
from webgis.models.user import ID_PREFIX
from webgis.storage import USERS, RecordStore

logger = logging.getLogger("WebGIS.auth")

DEFAULT_BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of a secret.
MAX_PASSWORD_BYTES = 72


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


class UserDirectory:
    """Registers and authenticates users. Returned users are sanitized by the caller."""

    def __init__(self, store: RecordStore, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    async def _hash(self, password: str) -> str:
        return await anyio.to_thread.run_sync(hash_password, password, self.bcrypt_rounds)

    async def register(
        self,
        full_name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> User:
        """Create a member account. Emails are unique regardless of case."""
        name = (full_name or "").strip()
        em = normalize_email(email)
        pw = password or ""

        if not name or not em or not pw.strip():
            raise ValidationError("fullName/email/password is required")
        if len(pw.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError("password is too long")

        # Hash outside the lock; it is the slow part.
        password_hash = await self._hash(pw)

        async with self.store.transaction(USERS):
            records = await self.store.read(USERS)
            if any(normalize_email(str(r.get("email", ""))) == em for r in records):
                logger.info(f"Registration refused, email already exists: {em}")
                raise ConflictError("email_already_exists")

            user = User(
                id=new_id(ID_PREFIX),
                full_name=name,
                email=em,
                password_hash=password_hash,
                role=UserRole.MEMBER,
            )
            records.append(user.to_record())
            await self.store.write(USERS, records)

        logger.info(f"Registered user {user.id} ({em})")
        return user

    async def login(self, email: Optional[str], password: Optional[str]) -> User:
        """Return the user whose email (any case) and password match."""
        em = normalize_email(email)
        pw = password or ""
        if not em or not pw:
            raise ValidationError("email/password is required")

        records = await self.store.read(USERS)
        for record in records:
            if normalize_email(str(record.get("email", ""))) != em:
                continue
            user = User.model_validate(record)
            if user.password_hash:
                ok = await anyio.to_thread.run_sync(check_password, pw, user.password_hash)
            elif user.password is not None:
                ok = secrets.compare_digest(user.password.encode("utf-8"), pw.encode("utf-8"))
                if ok:
                    user = await self._upgrade_legacy_password(user, pw)
            else:
                ok = False
            if ok:
                logger.info(f"User {user.id} logged in")
                return user

        logger.info(f"Failed login for {em}")
        raise AuthError("invalid_credentials")

    async def _upgrade_legacy_password(self, user: User, password: str) -> User:
        """Replace a plaintext password with its bcrypt hash."""
        password_hash = await self._hash(password)
        async with self.store.transaction(USERS):
            records = await self.store.read(USERS)
            for i, record in enumerate(records):
                if record.get("id") == user.id:
                    record.pop("password", None)
                    record["passwordHash"] = password_hash
                    records[i] = record
                    await self.store.write(USERS, records)
                    logger.info(f"Upgraded plaintext password of user {user.id}")
                    return User.model_validate(record)
        return user

    async def list(self) -> List[User]:
        """All users, in registration order."""
        return [User.model_validate(r) for r in await self.store.read(USERS)]
