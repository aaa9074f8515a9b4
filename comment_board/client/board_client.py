"""Comment board API client.

``CommentBoardClient`` plays the part of the browser script: it loads
comments from the service, renders them into a ``BoardView`` under its
``RenderPolicy``, submits and removes comments, and fetches the user
listing.  The client uses the ``requests`` library internally.

The high‑level methods are:

* :meth:`CommentBoardClient.load_comments` – fetch and render all comments.
* :meth:`CommentBoardClient.submit_comment` – post a comment and append it.
* :meth:`CommentBoardClient.remove_comment` – delete a comment and drop it
  from the view.
* :meth:`CommentBoardClient.fetch_users` – fetch and render the user table.

Rendered state lives only in the client's ``BoardView``; nothing is
cached between sessions.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from .rendering import RenderPolicy, render_comment, render_page, render_users_table, validate_input

logger = logging.getLogger(__name__)


class BoardClientError(Exception):
    """Raised when an API call whose failure the caller must see fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InputRejected(BoardClientError):
    """Raised by the safe client when input looks like a script payload."""


class BoardView:
    """Rendered comment fragments and user table of one client."""

    def __init__(self, policy: RenderPolicy) -> None:
        self.policy = policy
        self.fragments: List[Tuple[Optional[int], str]] = []
        self.users_html = ""
        self.notice = ""

    def add_comment(self, comment: Dict[str, Any]) -> str:
        fragment = render_comment(comment, self.policy)
        self.fragments.append((comment.get("id"), fragment))
        return fragment

    def clear_comments(self) -> None:
        self.fragments = []

    def remove_comment(self, comment_id: int) -> None:
        self.fragments = [(cid, fragment) for cid, fragment in self.fragments if cid != comment_id]

    def show_users(self, users: List[Dict[str, Any]]) -> None:
        self.users_html = render_users_table(users, self.policy)

    def comment_ids(self) -> List[Optional[int]]:
        return [cid for cid, _ in self.fragments]

    def to_html(self) -> str:
        return render_page(
            (fragment for _, fragment in self.fragments),
            self.policy,
            users_html=self.users_html,
            notice=self.notice,
        )


class CommentBoardClient:
    """Client for the comment board API.

    Args:
        base_url: Base URL of the API including the version prefix,
            e.g. ``http://localhost:3003/api/v1``.
        policy: Output encoding used when rendering received records.
        session: Optional requests session.  If not supplied a session
            will be created automatically.
        refresh_users_after_submit: Fetch the user table after every
            successful submission.  Defaults to ``True`` under the
            unsafe policy, mirroring the vulnerable browser script.
    """

    def __init__(
        self,
        *,
        base_url: str,
        policy: RenderPolicy = RenderPolicy.UNSAFE,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
        refresh_users_after_submit: Optional[bool] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.policy = RenderPolicy(policy)
        self.session = session or requests.Session()
        self.timeout = timeout
        if refresh_users_after_submit is None:
            refresh_users_after_submit = self.policy is RenderPolicy.UNSAFE
        self.refresh_users_after_submit = refresh_users_after_submit
        self.view = BoardView(self.policy)

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``.  On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` and ``message`` describing the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        message = err_json.get("detail") or err_json.get("error") or str(err_json)
                    else:
                        message = str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": str(message)}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Comment operations
    # ------------------------------------------------------------------
    def load_comments(self) -> List[Dict[str, Any]]:
        """Fetch all comments and render them into the view.

        Fragments from an earlier load are replaced, not appended to.

        On failure the view shows a notice instead and an empty list is
        returned.
        """
        data, error = self._request("GET", "/comments")
        if error:
            self.view.notice = "Failed to load comments. Please try again later."
            return []
        if not isinstance(data, list):
            logger.error("Expected array of comments but received: %r", data)
            self.view.notice = "Invalid comment data received."
            return []
        self.view.notice = ""
        self.view.clear_comments()
        for comment in data:
            self.view.add_comment(comment)
        return data

    def submit_comment(self, author: str, body: str) -> Dict[str, Any]:
        """Post a new comment and append it to the view.

        Raises:
            InputRejected: under the safe policy, when either field
                looks like a script payload.  Nothing is sent.
            BoardClientError: when the service rejects the comment.
        """
        if self.policy is RenderPolicy.SAFE and not (validate_input(author) and validate_input(body)):
            raise InputRejected("Invalid input. Please avoid using HTML tags or special characters.")
        data, error = self._request("POST", "/comments", json_body={"author": author, "body": body})
        if error:
            raise BoardClientError(error["message"], status_code=error["status_code"])
        self.view.add_comment(data)
        if self.refresh_users_after_submit:
            self.fetch_users()
        return data

    def remove_comment(self, comment_id: int) -> bool:
        """Delete a comment on the server and remove it from the view.

        The fragment is removed even when the server call fails.
        Returns whether the server confirmed the deletion.
        """
        _, error = self._request("DELETE", f"/comments/{comment_id}")
        if error:
            logger.error("Error deleting comment %s: %s", comment_id, error["message"])
        self.view.remove_comment(comment_id)
        return error is None

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def fetch_users(self) -> List[Dict[str, Any]]:
        """Fetch the user listing and render it into the view."""
        data, error = self._request("GET", "/users")
        if error or not isinstance(data, list):
            logger.error("Failed to fetch users.")
            return []
        self.view.show_users(data)
        return data

    def render(self) -> str:
        """Return the current view as an HTML document."""
        return self.view.to_html()
