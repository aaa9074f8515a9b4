"""
Server‑rendered board page.

Serves the comment board as a plain HTML page so the demo can be
opened in a browser without any client code.  The page is rendered
with the same ``render_board_page`` the client uses, under the policy
configured by ``RENDER_POLICY``.  With the unsafe policy a stored
``<script>`` comment runs for every visitor.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from comment_board.app.api.deps import get_comment_service, get_user_service
from comment_board.app.core.exceptions import NotFoundError, ValidationError
from comment_board.app.schemas.comment import CommentCreate
from comment_board.app.services import CommentService, UserService
from comment_board.client.rendering import (
    CONTENT_SECURITY_POLICY,
    RenderPolicy,
    render_board_page,
    validate_input,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _page(
    request: Request,
    comments: CommentService,
    users: UserService,
    show_users: bool = False,
    notice: str = "",
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    policy: RenderPolicy = request.app.state.render_policy
    content = render_board_page(
        await comments.list_comments(),
        policy,
        users=await users.list_users() if show_users else None,
        notice=notice,
        remove_action="/remove/{id}",
    )
    headers = {}
    if policy is RenderPolicy.SAFE:
        headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
    return HTMLResponse(content=content, status_code=status_code, headers=headers)


@router.get("/", response_class=HTMLResponse)
async def show_board(
    request: Request,
    users: bool = False,
    comment_service: CommentService = Depends(get_comment_service),
    user_service: UserService = Depends(get_user_service),
) -> HTMLResponse:
    """Render the board; ``?users=1`` appends the user table."""
    return await _page(request, comment_service, user_service, show_users=users)


@router.post("/", response_class=HTMLResponse)
async def post_from_board(
    request: Request,
    author: str = Form(""),
    body: str = Form(""),
    comment_service: CommentService = Depends(get_comment_service),
    user_service: UserService = Depends(get_user_service),
):
    """Handle the board's comment form and redirect back to the page."""
    policy: RenderPolicy = request.app.state.render_policy
    if policy is RenderPolicy.SAFE and not (validate_input(author) and validate_input(body)):
        return await _page(
            request,
            comment_service,
            user_service,
            notice="Invalid input. Please avoid using HTML tags or special characters.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    try:
        await comment_service.create_comment(CommentCreate(author=author, body=body))
    except ValidationError as e:
        return await _page(
            request,
            comment_service,
            user_service,
            notice=str(e),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/remove/{comment_id}")
async def remove_from_board(
    comment_id: int,
    comment_service: CommentService = Depends(get_comment_service),
) -> RedirectResponse:
    """Delete a comment from the board page.

    The page is shown again even if the comment was already gone.
    """
    try:
        await comment_service.delete_comment(comment_id)
    except NotFoundError:
        logger.info("Comment %s already removed", comment_id)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
