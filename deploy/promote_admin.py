#!/usr/bin/env python3
"""
Change a user's role directly in the users store.

Registration always creates members; this is the only way to get an admin.

Examples:
  python deploy/promote_admin.py alice@example.com
  python deploy/promote_admin.py alice@example.com --role member
"""
import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from webgis import config
from webgis.models import UserRole
from webgis.services.users import normalize_email
from webgis.storage import USERS, JsonFileStore, RecordStore


async def set_role(store: RecordStore, email: str, role: UserRole) -> bool:
    """Set the role of the user with ``email`` (any case). False if no such user."""
    em = normalize_email(email)
    async with store.transaction(USERS):
        records = await store.read(USERS)
        for record in records:
            if normalize_email(str(record.get("email", ""))) == em:
                record["role"] = role.value
                await store.write(USERS, records)
                return True
    return False


async def main(email: str, role: UserRole = UserRole.ADMIN, data_dir: Optional[Path] = None) -> int:
    store = JsonFileStore(data_dir or config.DATA_DIR)
    if not await set_role(store, email, role):
        print(f"ERROR: no user with email {email!r} in {store.path_for(USERS)}")
        return 1
    print(f"✓ {email} is now {role.value}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Change a WebGIS user's role")
    parser.add_argument("email", help="Email of the registered user")
    parser.add_argument(
        "--role",
        choices=[r.value for r in UserRole],
        default=UserRole.ADMIN.value,
        help="Role to assign (default: admin)",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Defaults to DATA_DIR")
    args = parser.parse_args()

    exit_code = asyncio.run(main(args.email, UserRole(args.role), args.data_dir))
    sys.exit(exit_code)
