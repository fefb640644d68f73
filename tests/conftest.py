"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from pact_webhooks.config import Settings
from pact_webhooks.models import BrokerResponse, Pacticipant, Request, Webhook, WebhookEvent
from pact_webhooks.resource import ResourceState
from pact_webhooks.services import BrokerClient


@pytest.fixture
def desired_document():
    """A complete desired-state document."""
    return {
        "description": "Trigger provider build",
        "enabled": True,
        "webhook_provider": {"name": "Bar"},
        "webhook_consumer": {"name": "Foo"},
        "events": ["contract_published", "provider_verification_published"],
        "request": {
            "url": "https://ci.example.com/hook",
            "method": "POST",
            "username": "ci",
            "password": "s3cr3t",
            "headers": {"Content-Type": "application/json", "X-Token": "abc"},
            "body": '{"ref": "main", "inputs": {"consumer": "Foo"}}',
        },
    }


@pytest.fixture
def remote_webhook():
    """The broker's representation of the webhook in ``desired_document``."""
    return Webhook(
        id="abc123",
        description="Trigger provider build",
        enabled=True,
        provider=Pacticipant(name="Bar"),
        consumer=Pacticipant(name="Foo"),
        events=[WebhookEvent(name="contract_published"), WebhookEvent(name="provider_verification_published")],
        request=Request(
            url="https://ci.example.com/hook",
            method="POST",
            username="ci",
            password="**********",
            headers={"Content-Type": "application/json", "X-Token": "abc"},
            body={"ref": "main", "inputs": {"consumer": "Foo"}},
        ),
    )


@pytest.fixture
def created_response():
    return BrokerResponse.model_validate(
        {"_links": {"self": {"href": "https://broker.example.com/webhooks/abc123", "title": "Webhook"}}}
    )


@pytest.fixture
def state(desired_document):
    return ResourceState(desired_document)


@pytest.fixture
def mock_client(created_response, remote_webhook):
    client = MagicMock(spec=BrokerClient)
    client.create_webhook.return_value = created_response
    client.update_webhook.return_value = created_response
    client.read_webhook.return_value = remote_webhook
    client.delete_webhook.return_value = None
    return client


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        PACT_BROKER_URL="https://broker.example.com/",
        PACT_BROKER_USERNAME="",
        PACT_BROKER_TOKEN="",
        REFRESH_AFTER_WRITE=False,
    )
