"""Tests for the state projector (pact_webhooks/resource/projector.py)."""

import json

import pytest

from pact_webhooks.exceptions import EncodeError
from pact_webhooks.models import Request, Webhook
from pact_webhooks.resource.parser import parse_webhook
from pact_webhooks.resource.projector import PASSWORD_PATH, is_masked, project_webhook


def prior(value):
    def lookup(key):
        assert key == PASSWORD_PATH
        return value

    return lookup


class TestPasswordReconciliation:
    """Tests for masked password handling."""

    def test_masked_password_uses_prior_value(self, remote_webhook):
        """Test the masked placeholder is replaced by the stored password."""
        document, error = project_webhook(remote_webhook, prior("s3cr3t"))
        assert error is None
        assert document["request"]["password"] == "s3cr3t"

    def test_fresh_password_copied(self, remote_webhook):
        """Test a real password wins over the stored one."""
        remote_webhook.request.password = "n3w"
        document, _ = project_webhook(remote_webhook, prior("s3cr3t"))
        assert document["request"]["password"] == "n3w"

    def test_empty_password_uses_prior_value(self, remote_webhook):
        """Test a missing password also falls back to the stored one."""
        remote_webhook.request.password = None
        document, _ = project_webhook(remote_webhook, prior("s3cr3t"))
        assert document["request"]["password"] == "s3cr3t"

    def test_no_prior_value_leaves_password_unset(self, remote_webhook):
        """Test nothing is made up when there is no stored password."""
        document, error = project_webhook(remote_webhook, prior(None))
        assert error is None
        assert "password" not in document["request"]

    def test_default_lookup_has_no_prior_value(self, remote_webhook):
        """Test the default lookup finds nothing."""
        document, _ = project_webhook(remote_webhook)
        assert "password" not in document["request"]

    @pytest.mark.parametrize(
        "password,expected",
        [("*****", True), ("**********", True), ("****", False), ("s3cr3t", False), ("", False), (None, False)],
    )
    def test_is_masked(self, password, expected):
        """Test only the fixed prefix marks a password as masked."""
        assert is_masked(password) is expected


class TestProjectWebhook:
    """Tests for project_webhook()."""

    def test_document_shape(self, remote_webhook):
        """Test every attribute is projected."""
        document, _ = project_webhook(remote_webhook, prior("s3cr3t"))
        assert document["description"] == "Trigger provider build"
        assert document["enabled"] is True
        assert document["webhook_provider"] == {"name": "Bar"}
        assert document["webhook_consumer"] == {"name": "Foo"}
        assert document["events"] == ["contract_published", "provider_verification_published"]
        assert document["request"]["url"] == "https://ci.example.com/hook"
        assert document["request"]["method"] == "POST"
        assert document["request"]["username"] == "ci"
        assert document["request"]["headers"] == {"Content-Type": "application/json", "X-Token": "abc"}
        assert document["request"]["body"] == '{"inputs":{"consumer":"Foo"},"ref":"main"}'

    def test_absent_pacticipants(self):
        """Test missing participants project as empty maps."""
        webhook = Webhook(request=Request(url="https://x/hook", method="GET"))
        document, _ = project_webhook(webhook)
        assert document["webhook_provider"] == {}
        assert document["webhook_consumer"] == {}
        assert document["events"] == []
        assert "body" not in document["request"]

    def test_headers_are_copied(self, remote_webhook):
        """Test the projected headers are a new dict."""
        document, _ = project_webhook(remote_webhook)
        document["request"]["headers"]["X-Token"] = "changed"
        assert remote_webhook.request.headers["X-Token"] == "abc"

    def test_body_encode_failure_is_not_fatal(self):
        """Test the rest of the document survives a body that cannot be encoded."""
        webhook = Webhook(
            description="bad body",
            request=Request(url="https://x/hook", method="POST", headers={"X": "1"}, body={"a": float("nan")}),
        )
        document, error = project_webhook(webhook)

        assert isinstance(error, EncodeError)
        assert error.field == "body"
        assert document["request"]["body"] == ""
        assert document["request"]["url"] == "https://x/hook"
        assert document["request"]["headers"] == {"X": "1"}
        assert document["description"] == "bad body"


class TestRoundTrip:
    """Tests for parse then project."""

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"X": "1"},
            {"Content-Type": "application/json", "Authorization": "Bearer ${user.token}", "X-Empty": ""},
        ],
    )
    def test_headers_round_trip(self, headers):
        """Test headers come back exactly as declared."""
        document = {"request": {"url": "https://x/hook", "method": "PUT", "headers": headers}}
        projected, _ = project_webhook(parse_webhook(document))
        assert projected["request"]["headers"] == headers

    def test_end_to_end(self):
        """Test a minimal document survives parse and project."""
        document = {
            "request": {
                "url": "https://x/hook",
                "method": "POST",
                "headers": {"X": "1"},
                "body": '{"a":1}',
            }
        }
        projected, error = project_webhook(parse_webhook(document))

        assert error is None
        assert projected["request"]["url"] == "https://x/hook"
        assert projected["request"]["method"] == "POST"
        assert projected["request"]["headers"] == {"X": "1"}
        assert json.loads(projected["request"]["body"]) == {"a": 1}

    def test_project_then_parse_is_stable(self, desired_document):
        """Test a projected document parses back to the same webhook."""
        first = parse_webhook(desired_document)
        projected, _ = project_webhook(first, prior("s3cr3t"))
        second = parse_webhook(projected)
        assert second == first

    def test_json_null_body_round_trip(self):
        """Test a literal null body projects back as null instead of disappearing."""
        document = {"request": {"url": "https://x/hook", "method": "POST", "headers": {}, "body": "null"}}
        webhook = parse_webhook(document)
        assert webhook.request.has_body is True

        projected, error = project_webhook(webhook)

        assert error is None
        assert projected["request"]["body"] == "null"

    def test_unset_body_not_projected(self):
        """Test an unset body stays out of the projection."""
        document = {"request": {"url": "https://x/hook", "method": "POST", "headers": {}}}
        projected, _ = project_webhook(parse_webhook(document))
        assert "body" not in projected["request"]
