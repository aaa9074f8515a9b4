"""
Comment endpoints for API v1.

List, create and delete comments.  Submitted text is returned exactly
as it was stored; there is intentionally no server‑side sanitisation
so the client's rendering policy decides whether markup executes.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from comment_board.app.api.deps import get_comment_service
from comment_board.app.core.exceptions import NotFoundError, ValidationError
from comment_board.app.schemas.comment import CommentCreate, CommentRead, DeleteResult
from comment_board.app.services.comment_service import CommentService

router = APIRouter()


@router.get("", response_model=List[CommentRead])
async def list_comments(service: CommentService = Depends(get_comment_service)) -> List[CommentRead]:
    """Return all comments, newest first."""
    return await service.list_comments()


@router.post("", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_in: CommentCreate,
    service: CommentService = Depends(get_comment_service),
) -> CommentRead:
    """Submit a new comment.

    Returns HTTP 400 if ``author`` or ``body`` is missing or empty.
    """
    try:
        return await service.create_comment(comment_in)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{comment_id}", response_model=DeleteResult)
async def delete_comment(
    comment_id: str,
    service: CommentService = Depends(get_comment_service),
) -> DeleteResult:
    """Delete a comment by ID.

    Returns HTTP 404 if it does not exist.  An ID that is not an integer
    cannot name a comment and is reported as not found too.
    """
    try:
        numeric_id = int(comment_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    try:
        await service.delete_comment(numeric_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DeleteResult()
