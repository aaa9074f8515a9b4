"""
Pydantic schemas for comments.

Comments are created from an author name and a body text and are
immutable afterwards.  Required fields are deliberately optional at
the schema level: presence is checked by ``CommentService`` so that a
missing field is reported as a 400 validation error rather than a
schema error.  Text is stored exactly as submitted; encoding for
display is the renderer's job.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    """Schema for submitting a new comment."""

    author: Optional[str] = Field(None, examples=["Alice"], description="Display name of the author")
    body: Optional[str] = Field(None, examples=["Hello"], description="Comment text")


class CommentRead(BaseModel):
    """Schema for reading a comment from the API."""

    id: int
    author: str
    body: str
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class DeleteResult(BaseModel):
    """Confirmation returned after a comment has been deleted."""

    message: str = "Comment deleted successfully"
