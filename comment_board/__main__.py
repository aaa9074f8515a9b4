"""Command line entry point.

Usage:
    python -m comment_board serve [--host HOST] [--port PORT]
    python -m comment_board show --base-url URL [--policy safe|unsafe] [--users]

``serve`` runs the API and board page with uvicorn.  ``show`` loads the
board through ``CommentBoardClient`` and prints the rendered HTML,
which makes it easy to compare both rendering policies side by side.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from uvicorn import Config, Server

from comment_board.app.core.config import settings
from comment_board.app.core.logging_config import setup_logging
from comment_board.client import CommentBoardClient, RenderPolicy


async def run_service(host: str, port: int) -> None:
    """Start the comment board service using Uvicorn."""
    from comment_board.app.main import app

    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


def show_board(base_url: str, policy: str, users: bool) -> int:
    client = CommentBoardClient(base_url=base_url, policy=RenderPolicy(policy), refresh_users_after_submit=False)
    client.load_comments()
    if users:
        client.fetch_users()
    print(client.render())
    return 1 if client.view.notice else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="comment_board", description="Comment board XSS demo")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="run the API and board page")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    show = subparsers.add_parser("show", help="render the board through the client")
    show.add_argument("--base-url", default=f"http://localhost:{settings.port}/api/v1")
    show.add_argument("--policy", choices=[p.value for p in RenderPolicy], default=RenderPolicy.UNSAFE.value)
    show.add_argument("--users", action="store_true", help="include the user table")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.log_level, settings.log_file or None)
    if args.command == "serve":
        try:
            asyncio.run(run_service(args.host, args.port))
        except (KeyboardInterrupt, SystemExit):
            logging.getLogger(__name__).info("Service stopped")
        return 0
    return show_board(args.base_url, args.policy, args.users)


if __name__ == "__main__":
    sys.exit(main())
