"""
Rendering client for the comment board.

``rendering`` holds the policy‑parameterised HTML renderer shared with
the service's board page; ``board_client`` holds the HTTP client.
"""

from .board_client import BoardClientError, BoardView, CommentBoardClient, InputRejected
from .rendering import RenderPolicy, render_board_page, render_comment, render_users_table, validate_input

__all__ = [
    "BoardClientError",
    "BoardView",
    "CommentBoardClient",
    "InputRejected",
    "RenderPolicy",
    "render_board_page",
    "render_comment",
    "render_users_table",
    "validate_input",
]
