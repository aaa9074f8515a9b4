"""
Error taxonomy of the comment board service.

Services raise these exceptions; the API layer translates
``ValidationError`` and ``NotFoundError`` into HTTP 400 and 404.
``StoreUnavailableError`` never reaches a caller: the fallback store
catches it and serves the request from memory.
"""


class CommentBoardError(Exception):
    """Base class for all service errors."""


class ValidationError(CommentBoardError):
    """Raised when a comment is submitted without author or body."""


class NotFoundError(CommentBoardError):
    """Raised when a comment identifier does not exist."""


class StoreUnavailableError(CommentBoardError):
    """Raised by a store when its backend cannot be reached or queried."""
