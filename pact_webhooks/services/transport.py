from typing import Protocol

from pact_webhooks.models import BrokerResponse, Webhook


class WebhookTransport(Protocol):
    """What the reconciliation operations need from the broker.

    Every method raises ``TransportError`` on failure.
    """

    def create_webhook(self, webhook: Webhook) -> BrokerResponse: ...

    def update_webhook(self, webhook: Webhook) -> BrokerResponse: ...

    def read_webhook(self, webhook_id: str) -> Webhook: ...

    def delete_webhook(self, webhook: Webhook) -> None: ...
