from contextlib import contextmanager
from typing import Iterator

import httpx

from pact_webhooks.config import Settings, settings
from pact_webhooks.services.broker_client import BrokerClient
from pact_webhooks.services.transport import WebhookTransport


@contextmanager
def http_client() -> Iterator[httpx.Client]:
    with httpx.Client() as client:
        yield client


@contextmanager
def broker_client(config: Settings = settings) -> Iterator[BrokerClient]:
    with http_client() as client:
        yield BrokerClient(client, config)


__all__ = [
    "BrokerClient",
    "WebhookTransport",
    "broker_client",
    "http_client",
]
