"""
Tests for the rendering client against the real application
"""

from unittest.mock import MagicMock

import pytest
import requests

from comment_board.client import BoardClientError, CommentBoardClient, InputRejected, RenderPolicy
from tests.conftest import TestClientSession

BASE_URL = "http://testserver/api/v1"
PAYLOAD = "<script>alert(1)</script>"


@pytest.fixture
def session(unsafe_client):
    return TestClientSession(unsafe_client)


def make_client(session, policy, **kwargs):
    return CommentBoardClient(base_url=BASE_URL, policy=policy, session=session, **kwargs)


class TestLoadComments:
    """Test loading the board"""

    def test_renders_existing_comments_newest_first(self, session):
        writer = make_client(session, RenderPolicy.SAFE)
        writer.submit_comment("Alice", "first")
        writer.submit_comment("Bob", "second")

        reader = make_client(session, RenderPolicy.SAFE)
        comments = reader.load_comments()
        assert [c["body"] for c in comments] == ["second", "first"]
        assert reader.view.comment_ids() == [c["id"] for c in comments]
        assert reader.view.notice == ""

    def test_reload_replaces_fragments(self, session):
        client = make_client(session, RenderPolicy.SAFE)
        client.submit_comment("Alice", "Hello")
        first = client.load_comments()
        second = client.load_comments()
        assert first == second
        assert client.view.comment_ids() == [c["id"] for c in second]
        assert client.render().count("Hello") == 1

    def test_network_failure_sets_notice(self):
        broken = MagicMock()
        broken.request.side_effect = requests.ConnectionError("refused")
        client = make_client(broken, RenderPolicy.SAFE)
        assert client.load_comments() == []
        assert "Failed to load comments" in client.render()

    def test_unexpected_payload_sets_notice(self):
        response = requests.Response()
        response.status_code = 200
        response._content = b'{"not": "a list"}'
        fake = MagicMock()
        fake.request.return_value = response
        client = make_client(fake, RenderPolicy.SAFE)
        assert client.load_comments() == []
        assert client.view.notice == "Invalid comment data received."


class TestSubmitComment:
    """Test submitting comments under both policies"""

    def test_unsafe_client_renders_payload_as_markup(self, session):
        client = make_client(session, RenderPolicy.UNSAFE)
        client.submit_comment("Mallory", PAYLOAD)
        assert PAYLOAD in client.render()

    def test_safe_client_rejects_payload_before_sending(self, session):
        client = make_client(session, RenderPolicy.SAFE)
        with pytest.raises(InputRejected):
            client.submit_comment("Mallory", PAYLOAD)
        assert session.calls == []

    def test_safe_client_displays_stored_payload_as_text(self, session):
        # Stored by someone else, e.g. through the unsafe client.
        make_client(session, RenderPolicy.UNSAFE).submit_comment("Mallory", PAYLOAD)
        client = make_client(session, RenderPolicy.SAFE)
        client.load_comments()
        page = client.render()
        assert PAYLOAD not in page
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in page

    def test_service_validation_error_raised(self, session):
        client = make_client(session, RenderPolicy.UNSAFE)
        with pytest.raises(BoardClientError) as exc_info:
            client.submit_comment("", "Hello")
        assert exc_info.value.status_code == 400
        assert "required" in str(exc_info.value)
        assert client.view.comment_ids() == []

    def test_unsafe_client_refreshes_users_after_submit(self, session):
        client = make_client(session, RenderPolicy.UNSAFE)
        client.submit_comment("Alice", "Hello")
        assert ("GET", f"{BASE_URL}/users", None) in session.calls
        assert "<td>admin123</td>" in client.render()

    def test_safe_client_does_not_refresh_users(self, session):
        client = make_client(session, RenderPolicy.SAFE)
        client.submit_comment("Alice", "Hello")
        assert all(url != f"{BASE_URL}/users" for _, url, _ in session.calls)


class TestRemoveComment:
    """Test removing comments"""

    def test_remove_existing(self, session):
        client = make_client(session, RenderPolicy.SAFE)
        created = client.submit_comment("Alice", "Hello")
        assert client.remove_comment(created["id"]) is True
        assert client.view.comment_ids() == []
        assert make_client(session, RenderPolicy.SAFE).load_comments() == []

    def test_remove_unknown_still_updates_view(self, session):
        client = make_client(session, RenderPolicy.SAFE)
        client.view.add_comment({"id": 4242, "author": "Ghost", "body": "Boo"})
        assert client.remove_comment(4242) is False
        assert client.view.comment_ids() == []


class TestFetchUsers:
    """Test the unprotected user listing"""

    def test_users_rendered_with_passwords(self, session):
        client = make_client(session, RenderPolicy.SAFE)
        users = client.fetch_users()
        assert [u["password"] for u in users] == ["admin123", "password123", "secret456"]
        assert "<td>secret456</td>" in client.render()

    def test_failure_returns_empty(self):
        broken = MagicMock()
        broken.request.side_effect = requests.Timeout("slow")
        client = make_client(broken, RenderPolicy.UNSAFE)
        assert client.fetch_users() == []
        assert "User Database" not in client.render()
