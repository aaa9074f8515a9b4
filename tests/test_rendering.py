"""
Tests for policy-parameterised rendering
"""

from datetime import datetime

import pytest

from comment_board.client.rendering import (
    CONTENT_SECURITY_POLICY,
    RenderPolicy,
    encode,
    format_date,
    render_board_page,
    render_comment,
    render_users_table,
    validate_input,
)

PAYLOAD = "<script>alert(1)</script>"


def _comment(**overrides):
    comment = {"id": 7, "author": "Alice", "body": "Hello", "created_at": "2024-05-01T10:20:30"}
    comment.update(overrides)
    return comment


class TestRenderComment:
    """Test rendering of a single comment"""

    def test_safe_policy_displays_script_as_text(self):
        html = render_comment(_comment(body=PAYLOAD), RenderPolicy.SAFE)
        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html

    def test_unsafe_policy_inserts_markup(self):
        # Documents the vulnerability: the payload becomes part of the page.
        html = render_comment(_comment(body=PAYLOAD), RenderPolicy.UNSAFE)
        assert f'<div class="comment-text">{PAYLOAD}</div>' in html

    def test_safe_policy_escapes_author(self):
        html = render_comment(_comment(author='<img src=x onerror="alert(1)">'), RenderPolicy.SAFE)
        assert "<img" not in html
        assert "&quot;alert(1)&quot;" in html

    def test_plain_text_identical_under_both_policies(self):
        comment = _comment()
        assert render_comment(comment, RenderPolicy.SAFE) == render_comment(comment, RenderPolicy.UNSAFE)

    def test_defaults(self):
        html = render_comment({"id": None, "author": "", "body": None}, RenderPolicy.SAFE)
        assert '<div class="comment-author">Anonymous</div>' in html
        assert '<div class="comment-text"></div>' in html
        assert "data-comment-id" not in html

    def test_id_attribute_and_date(self):
        html = render_comment(_comment(), RenderPolicy.UNSAFE)
        assert 'data-comment-id="7"' in html
        assert '<div class="comment-date">2024-05-01 10:20:30</div>' in html

    def test_accepts_objects(self):
        class Record:
            id = 3
            author = "Bob"
            body = "Hi"
            created_at = datetime(2024, 1, 2, 3, 4, 5)

        html = render_comment(Record(), RenderPolicy.SAFE)
        assert '<div class="comment-author">Bob</div>' in html
        assert "2024-01-02 03:04:05" in html

    def test_remove_action_form(self):
        html = render_comment(_comment(), RenderPolicy.SAFE, remove_action="/remove/7")
        assert '<form class="remove-comment-form" method="post" action="/remove/7">' in html


class TestEncode:
    """Test the encoding primitive"""

    def test_safe_escapes_quotes(self):
        assert encode("\"'&", RenderPolicy.SAFE) == "&quot;&#x27;&amp;"

    def test_unsafe_passes_through(self):
        assert encode(PAYLOAD, RenderPolicy.UNSAFE) == PAYLOAD

    def test_none_is_empty(self):
        assert encode(None, RenderPolicy.SAFE) == ""


class TestFormatDate:
    """Test timestamp display"""

    def test_iso_with_zulu(self):
        assert format_date("2024-05-01T10:20:30Z") == "2024-05-01 10:20:30"

    def test_unparsable_is_shown_as_is(self):
        assert format_date("yesterday") == "yesterday"

    def test_missing_uses_now(self):
        assert format_date(None).startswith(str(datetime.now().year))


class TestValidateInput:
    """Test the defense-in-depth input filter"""

    @pytest.mark.parametrize(
        "text",
        [
            PAYLOAD,
            "<SCRIPT src=//evil>",
            "javascript:alert(1)",
            "JavaScript:void(0)",
            '<img src=x onerror="alert(1)">',
            "<body ONLOAD=go()>",
        ],
    )
    def test_rejects_script_patterns(self, text):
        assert validate_input(text) is False

    @pytest.mark.parametrize("text", ["Hello", "Alice", "2 < 3 and 5 > 4", "", None])
    def test_accepts_plain_text(self, text):
        assert validate_input(text) is True


class TestUsersTable:
    """Test the user table"""

    USERS = [{"id": 1, "username": "admin", "password": "admin123", "email": "admin@example.com"}]

    @pytest.mark.parametrize("policy", list(RenderPolicy))
    def test_password_shown_verbatim(self, policy):
        html = render_users_table(self.USERS, policy)
        assert "<td>admin123</td>" in html
        assert "<th>Password</th>" in html

    def test_safe_policy_escapes_fields(self):
        users = [dict(self.USERS[0], username="<b>admin</b>")]
        assert "<td>&lt;b&gt;admin&lt;/b&gt;</td>" in render_users_table(users, RenderPolicy.SAFE)
        assert "<td><b>admin</b></td>" in render_users_table(users, RenderPolicy.UNSAFE)


class TestBoardPage:
    """Test full page rendering"""

    def test_safe_page_has_csp(self):
        html = render_board_page([_comment()], RenderPolicy.SAFE)
        assert CONTENT_SECURITY_POLICY in html
        assert 'id="comments-container"' in html

    def test_unsafe_page_has_no_csp(self):
        html = render_board_page([_comment()], RenderPolicy.UNSAFE)
        assert "Content-Security-Policy" not in html

    def test_users_only_when_given(self):
        assert "User Database" not in render_board_page([], RenderPolicy.SAFE)
        assert "User Database" in render_board_page([], RenderPolicy.SAFE, users=TestUsersTable.USERS)

    def test_remove_action_template(self):
        html = render_board_page([_comment()], RenderPolicy.SAFE, remove_action="/remove/{id}")
        assert 'action="/remove/7"' in html

    def test_notice_is_escaped(self):
        html = render_board_page([], RenderPolicy.UNSAFE, notice="<b>oops</b>")
        assert "&lt;b&gt;oops&lt;/b&gt;" in html
