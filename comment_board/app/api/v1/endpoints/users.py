"""
User endpoints for API v1.

The listing is deliberately unauthenticated and returns passwords in
clear text.  Do not copy this endpoint into a real application.
"""

from typing import List

from fastapi import APIRouter, Depends

from comment_board.app.api.deps import get_user_service
from comment_board.app.schemas.user import UserRead
from comment_board.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return every user, including the password field."""
    return await service.list_users()
