"""
Top‑level package for the Comment Board XSS demo.

``comment_board.app`` is the FastAPI service that stores comments and
exposes the (deliberately unprotected) user table.
``comment_board.client`` renders the board under an unsafe or a safe
output‑encoding policy.
"""

__version__ = "1.0.0"

__all__ = []
