"""
Primary/fallback store composition.

Every call goes to the primary store first.  When the primary raises
``StoreUnavailableError`` the failure is logged and the same call is
served by the fallback store.  The two stores are never reconciled:
records written to memory during an outage stay there.
"""

import logging
from typing import Awaitable, Callable, List, TypeVar

from ..core.exceptions import StoreUnavailableError
from ..schemas.comment import CommentRead
from ..schemas.user import UserRead
from .base import CommentStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FallbackStore(CommentStore):
    """Serve from ``primary`` and degrade to ``fallback`` per call."""

    def __init__(self, primary: CommentStore, fallback: CommentStore) -> None:
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    def open(self) -> None:
        self.primary.open()
        self.fallback.open()

    def close(self) -> None:
        self.primary.close()
        self.fallback.close()

    async def _call(self, operation: str, method: Callable[[CommentStore], Awaitable[T]]) -> T:
        try:
            return await method(self.primary)
        except StoreUnavailableError as exc:
            logger.warning(
                "%s failed on %s store (%s); falling back to %s store",
                operation,
                self.primary.name,
                exc,
                self.fallback.name,
            )
            return await method(self.fallback)

    async def list_comments(self) -> List[CommentRead]:
        return await self._call("list_comments", lambda store: store.list_comments())

    async def add_comment(self, author: str, body: str) -> CommentRead:
        return await self._call("add_comment", lambda store: store.add_comment(author, body))

    async def delete_comment(self, comment_id: int) -> bool:
        return await self._call("delete_comment", lambda store: store.delete_comment(comment_id))

    async def list_users(self) -> List[UserRead]:
        return await self._call("list_users", lambda store: store.list_users())
