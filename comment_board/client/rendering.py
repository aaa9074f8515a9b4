"""
HTML rendering of the comment board.

Every piece of received text passes through ``encode`` with an explicit
``RenderPolicy``:

* ``RenderPolicy.UNSAFE`` inserts the text verbatim, so markup or
  script in a comment becomes part of the page.  This is the XSS
  vulnerability the demo is built around.
* ``RenderPolicy.SAFE`` escapes ``& < > " '`` with ``html.escape`` so
  the text can only ever be displayed, never parsed as markup.

``validate_input`` is an additional filter used by the safe client.
It rejects obvious script payloads but is not what makes the safe
policy safe; output encoding is.
"""

from __future__ import annotations

import html
import re
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

CONTENT_SECURITY_POLICY = "default-src 'self'; script-src 'self'; object-src 'none';"

_SCRIPT_PATTERN = re.compile(r"<script|javascript:|on\w+=", re.IGNORECASE)


class RenderPolicy(str, Enum):
    """Output encoding applied to untrusted text."""

    UNSAFE = "unsafe"
    SAFE = "safe"


def encode(value: Any, policy: RenderPolicy) -> str:
    """Prepare ``value`` for insertion into HTML under ``policy``."""
    text = "" if value is None else str(value)
    if policy is RenderPolicy.SAFE:
        return html.escape(text, quote=True)
    return text


def validate_input(text: Optional[str]) -> bool:
    """Return ``False`` for text containing an obvious script payload.

    Matches a ``<script`` opener, a ``javascript:`` URI or an inline
    event handler such as ``onerror=``, case‑insensitively.
    """
    if not text:
        return True
    return _SCRIPT_PATTERN.search(text) is None


def format_date(value: Any) -> str:
    """Format a timestamp for display.

    Accepts ``datetime`` objects and ISO 8601 strings as returned by
    the API; unparsable strings are shown as received.  A missing value
    falls back to the current time.
    """
    if value is None or value == "":
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return str(value)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def render_comment(comment: Any, policy: RenderPolicy, remove_action: Optional[str] = None) -> str:
    """Render one comment as a ``div.comment`` fragment.

    ``comment`` may be a mapping (decoded JSON) or an object with
    ``id``, ``author``, ``body`` and ``created_at`` attributes.  When
    ``remove_action`` is given the remove button is wrapped in a form
    posting to that URL.
    """
    comment_id = _field(comment, "id")
    author = _field(comment, "author") or "Anonymous"
    body = _field(comment, "body") or ""
    date = format_date(_field(comment, "created_at"))

    id_attr = f' data-comment-id="{encode(comment_id, RenderPolicy.SAFE)}"' if comment_id else ""
    button = '<button class="remove-comment-btn">Remove</button>'
    if remove_action:
        button = (
            f'<form class="remove-comment-form" method="post" action="{html.escape(remove_action)}">'
            f"{button}</form>"
        )
    return (
        f'<div class="comment"{id_attr}>\n'
        f'    <div class="comment-author">{encode(author, policy)}</div>\n'
        f'    <div class="comment-text">{encode(body, policy)}</div>\n'
        f'    <div class="comment-date">{encode(date, policy)}</div>\n'
        f"    {button}\n"
        f"</div>"
    )


def render_users_table(users: Iterable[Any], policy: RenderPolicy) -> str:
    """Render the user listing, password column included.

    The policy only controls encoding; no field is ever hidden.
    """
    rows = "\n".join(
        "        <tr>"
        f"<td>{encode(_field(user, 'id'), policy)}</td>"
        f"<td>{encode(_field(user, 'username'), policy)}</td>"
        f"<td>{encode(_field(user, 'password'), policy)}</td>"
        f"<td>{encode(_field(user, 'email'), policy)}</td>"
        "</tr>"
        for user in users
    )
    return (
        '<div id="users-container">\n'
        "<h5>User Database</h5>\n"
        "<table>\n"
        "    <thead>\n"
        "        <tr><th>ID</th><th>Username</th><th>Password</th><th>Email</th></tr>\n"
        "    </thead>\n"
        "    <tbody>\n"
        f"{rows}\n"
        "    </tbody>\n"
        "</table>\n"
        "</div>"
    )


def render_page(
    fragments: Iterable[str],
    policy: RenderPolicy,
    *,
    users_html: str = "",
    notice: str = "",
    title: str = "Comment Board",
    form_action: str = "/",
    users_link: str = "/?users=1",
) -> str:
    """Assemble an HTML document from already rendered fragments.

    ``notice`` is trusted, service‑generated text and is always
    escaped.  Under the safe policy the document declares a
    Content‑Security‑Policy.
    """
    csp = ""
    if policy is RenderPolicy.SAFE:
        csp = f'    <meta http-equiv="Content-Security-Policy" content="{CONTENT_SECURITY_POLICY}">\n'
    comments_html = "\n".join(fragments)
    notice_html = f'<p id="notice">{html.escape(notice)}</p>\n' if notice else ""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '    <meta charset="utf-8">\n'
        f"{csp}"
        f"    <title>{html.escape(title)}</title>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>{html.escape(title)}</h1>\n"
        f'<form id="comment-form" method="post" action="{html.escape(form_action)}">\n'
        '    <input id="name" name="author" placeholder="Your name">\n'
        '    <textarea id="comment" name="body" placeholder="Your comment"></textarea>\n'
        '    <button type="submit">Post Comment</button>\n'
        "</form>\n"
        f"{notice_html}"
        f'<div id="comments-container">\n{comments_html}\n</div>\n'
        f'<a id="fetch-users-btn" href="{html.escape(users_link)}">Show user database</a>\n'
        f"{users_html}\n"
        "</body>\n"
        "</html>\n"
    )


def render_board_page(
    comments: Iterable[Any],
    policy: RenderPolicy,
    users: Optional[Iterable[Any]] = None,
    notice: str = "",
    remove_action: Optional[str] = None,
) -> str:
    """Render a complete board page from comment and user records.

    ``remove_action`` is a format string receiving the comment id, e.g.
    ``"/remove/{id}"``.
    """
    fragments = [
        render_comment(
            comment,
            policy,
            remove_action=remove_action.format(id=_field(comment, "id")) if remove_action else None,
        )
        for comment in comments
    ]
    users_html = render_users_table(users, policy) if users is not None else ""
    return render_page(fragments, policy, users_html=users_html, notice=notice)
