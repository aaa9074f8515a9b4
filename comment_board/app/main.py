"""
Main entrypoint for the Comment Board API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``.  Run it with uvicorn, e.g.::

    uvicorn comment_board.app.main:app --reload

or through ``python -m comment_board serve``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.board import router as board_router
from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.logging_config import setup_logging
from .stores import build_store
from .stores.base import CommentStore
from ..client.rendering import RenderPolicy


def resolve_render_policy(value) -> RenderPolicy:
    """Map a configured policy name to ``RenderPolicy``, case‑insensitively.

    Unknown names are logged and fall back to the unsafe policy so the
    service still starts.
    """
    if isinstance(value, RenderPolicy):
        return value
    try:
        return RenderPolicy(str(value).strip().lower())
    except ValueError:
        logging.getLogger(__name__).warning(
            "Unknown render policy %r; using %s", value, RenderPolicy.UNSAFE.value
        )
        return RenderPolicy.UNSAFE


def create_app(
    store: Optional[CommentStore] = None,
    app_settings: Optional[Settings] = None,
    render_policy: Optional[RenderPolicy] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[CommentStore]
        Pre‑built store to serve from.  When omitted the store is
        selected from settings once, at start‑up.
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.
    render_policy : Optional[RenderPolicy]
        Output encoding of the served board page.  Defaults to
        ``RENDER_POLICY``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    cfg = app_settings or settings
    setup_logging(cfg.log_level, cfg.log_file or None)

    app = FastAPI(title=cfg.project_name, version=cfg.api_version, debug=cfg.debug)
    app.state.store = store
    app.state.render_policy = resolve_render_policy(render_policy or cfg.render_policy)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # The browser script of the original demo talks to ``/api``; keep that
    # prefix working next to the versioned one.
    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(v1_router, prefix="/api", include_in_schema=False)
    app.include_router(board_router, tags=["board"])

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed requests are client errors like missing fields: 400, not 422.
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok", "store": app.state.store.name if app.state.store else None}

    @app.on_event("startup")
    async def startup_event() -> None:
        if app.state.store is None:
            app.state.store = build_store(cfg)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        if app.state.store is not None:
            app.state.store.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
