"""
FastAPI dependencies shared by the v1 endpoints.

The store is created once in ``main.create_app`` and kept on
``app.state``; routes receive services built around it.
"""

from fastapi import Depends, Request

from ..services import CommentService, UserService
from ..stores.base import CommentStore


def get_store(request: Request) -> CommentStore:
    return request.app.state.store


def get_comment_service(store: CommentStore = Depends(get_store)) -> CommentService:
    return CommentService(store)


def get_user_service(store: CommentStore = Depends(get_store)) -> UserService:
    return UserService(store)
