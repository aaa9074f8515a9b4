"""
Pydantic models for user data.

In a real application you would never return passwords through the
API.  Here the full record, clear‑text password included, is part of
the demonstration and must not be filtered or redacted.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    username: str = Field(..., examples=["admin"])
    password: str = Field(..., examples=["admin123"])
    email: str = Field(..., examples=["admin@example.com"])
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }
