"""Create, read, update and delete for the webhook resource.

Each operation parses the stored or desired document, makes exactly one
broker call (plus a read-back when ``REFRESH_AFTER_WRITE`` is on) and writes
the outcome back through ``ResourceData``.
"""

import logging
from typing import Optional

from pact_webhooks.config import Settings, settings
from pact_webhooks.exceptions import EncodeError, TransportError
from pact_webhooks.models import BrokerResponse, Webhook
from pact_webhooks.resource.parser import parse_webhook
from pact_webhooks.resource.projector import project_webhook
from pact_webhooks.resource.schema import redact_document
from pact_webhooks.resource.state import ResourceData
from pact_webhooks.services.transport import WebhookTransport
from pact_webhooks.utils.utils import id_from_href

logger = logging.getLogger(__name__)


def _prior_password(data: ResourceData):
    def lookup(key: str) -> Optional[str]:
        value, ok = data.get_ok_exists(key)
        if not ok or not isinstance(value, str):
            return None
        return value

    return lookup


def _parse(data: ResourceData, existing_id: str = "") -> Webhook:
    document = data.to_document()
    logger.debug("webhook %r state %s", data.id, redact_document(document))
    return parse_webhook(document, existing_id)


def set_webhook_state(data: ResourceData, webhook: Webhook) -> Optional[EncodeError]:
    document, error = project_webhook(webhook, _prior_password(data))
    for key, value in document.items():
        data.set(key, value)
    if error is not None:
        logger.warning("webhook %s: %s", data.id, error)
    return error


def _self_link_id(response: BrokerResponse) -> str:
    link = response.links.get("self")
    if link is None:
        raise TransportError("Broker response has no 'self' link")
    webhook_id = id_from_href(link.href)
    if not webhook_id:
        raise TransportError(f"Unable to take a webhook id from {link.href!r}")
    return webhook_id


def create(data: ResourceData, client: WebhookTransport, config: Settings = settings) -> None:
    webhook = _parse(data)

    try:
        response = client.create_webhook(webhook)
        logger.debug("response from creating webhook %s", response)
        webhook.id = _self_link_id(response)
    except TransportError as e:
        logger.error("webhook creation failed: %s", e)
        data.set_id("")
        raise

    data.set_id(webhook.id)
    logger.info("created webhook %s", webhook.id)
    set_webhook_state(data, webhook)

    if config.REFRESH_AFTER_WRITE:
        read(data, client)


def update(data: ResourceData, client: WebhookTransport, config: Settings = settings) -> None:
    webhook = _parse(data, data.id)

    try:
        response = client.update_webhook(webhook)
    except TransportError as e:
        logger.error("webhook update failed: %s", e)
        data.set_id("")
        raise

    logger.debug("response from updating webhook %s", response)
    logger.info("updated webhook %s", webhook.id)
    set_webhook_state(data, webhook)

    if config.REFRESH_AFTER_WRITE:
        read(data, client)


def read(data: ResourceData, client: WebhookTransport) -> None:
    webhook = _parse(data, data.id)

    try:
        remote = client.read_webhook(webhook.id)
    except TransportError as e:
        # gone from the broker, forget it so it gets planned for creation
        logger.warning("webhook read failed, removing %s from state: %s", webhook.id, e)
        data.set_id("")
        return

    logger.debug("read webhook %s", remote.id)
    set_webhook_state(data, remote)


def delete(data: ResourceData, client: WebhookTransport) -> None:
    webhook = _parse(data, data.id)

    logger.debug("deleting webhook %s", webhook.id)
    try:
        client.delete_webhook(webhook)
    except TransportError as e:
        logger.error("webhook deletion failed for %s: %s", webhook.id, e)
        raise

    data.set_id("")
    logger.info("deleted webhook %s", webhook.id)
