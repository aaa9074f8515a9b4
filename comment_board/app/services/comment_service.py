"""
Business logic for comments.

``CommentService`` validates submissions and delegates persistence to
the injected store.  Text is stored exactly as submitted: no
sanitisation happens here, encoding for display belongs to the
renderer (``comment_board.client.rendering``).
"""

import logging
from typing import List

from ..core.exceptions import NotFoundError, ValidationError
from ..schemas.comment import CommentCreate, CommentRead
from ..stores.base import CommentStore


def _is_utf8(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class CommentService:
    """Create, list and delete comments."""

    def __init__(self, store: CommentStore) -> None:
        self.store = store

    async def list_comments(self) -> List[CommentRead]:
        """Return all comments, newest first."""
        return await self.store.list_comments()

    async def create_comment(self, data: CommentCreate) -> CommentRead:
        """Persist a new comment.

        Both ``author`` and ``body`` must be present and non‑empty,
        otherwise ``ValidationError`` is raised and nothing is stored.
        Text that cannot be encoded as UTF‑8 (lone surrogates) is
        rejected the same way.
        """
        logger = logging.getLogger(__name__)
        if not data.author or not data.body:
            logger.error("Missing required fields in comment submission")
            raise ValidationError("Author and body are required fields")
        if not (_is_utf8(data.author) and _is_utf8(data.body)):
            logger.error("Comment submission is not valid UTF-8 text")
            raise ValidationError("Author and body must be valid UTF-8 text")
        comment = await self.store.add_comment(data.author, data.body)
        logger.info("Comment %s added by %r", comment.id, comment.author)
        return comment

    async def delete_comment(self, comment_id: int) -> None:
        """Delete a comment or raise ``NotFoundError``."""
        logger = logging.getLogger(__name__)
        deleted = await self.store.delete_comment(comment_id)
        if not deleted:
            raise NotFoundError("Comment not found")
        logger.info("Deleted comment %s", comment_id)
