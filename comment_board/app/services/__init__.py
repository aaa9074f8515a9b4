"""
Service layer.

Services hold the request‑independent logic and raise the exceptions
from ``core.exceptions``.  Each service is constructed around the
store attached to the application at start‑up.
"""

from .comment_service import CommentService
from .user_service import UserService

__all__ = ["CommentService", "UserService"]
