"""
Business logic for users.

Users are read‑only.  The listing returns every record with its
clear‑text password and applies no access control: this is the
authorization gap the demo exhibits, not an oversight.
"""

from typing import List

from ..schemas.user import UserRead
from ..stores.base import CommentStore


class UserService:
    """Read access to the user table."""

    def __init__(self, store: CommentStore) -> None:
        self.store = store

    async def list_users(self) -> List[UserRead]:
        return await self.store.list_users()
