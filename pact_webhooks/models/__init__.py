from pact_webhooks.models.broker_response import BrokerResponse, Link
from pact_webhooks.models.webhook import Pacticipant, Request, Webhook, WebhookEvent

__all__ = [
    "BrokerResponse",
    "Link",
    "Pacticipant",
    "Request",
    "Webhook",
    "WebhookEvent",
]
