import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from pact_webhooks.config import Settings, settings
from pact_webhooks.exceptions import TransportError
from pact_webhooks.models import BrokerResponse, Webhook

logger = logging.getLogger(__name__)

HAL_JSON = "application/hal+json"


class BrokerClient:

    def __init__(self, http_client: httpx.Client, config: Settings = settings):
        self._client = http_client
        self._settings = config
        self._base_url = config.PACT_BROKER_URL.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": f"{HAL_JSON}, application/json",
            "Content-Type": "application/json",
        }
        token = self._settings.PACT_BROKER_TOKEN.get_secret_value()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _auth(self) -> Optional[httpx.BasicAuth]:
        username = self._settings.PACT_BROKER_USERNAME
        if not username or self._settings.PACT_BROKER_TOKEN.get_secret_value():
            return None
        return httpx.BasicAuth(username, self._settings.PACT_BROKER_PASSWORD.get_secret_value())

    def _webhook_url(self, webhook_id: str = "") -> str:
        if webhook_id:
            return f"{self._base_url}/webhooks/{webhook_id}"
        return f"{self._base_url}/webhooks"

    def _send(self, method: str, url: str, payload: Optional[Dict[str, Any]] = None) -> httpx.Response:
        logger.debug("%s %s", method, url)
        request_kwargs: Dict[str, Any] = {
            "headers": self._headers(),
            "timeout": self._settings.REQUEST_TIMEOUT,
        }
        auth = self._auth()
        if auth is not None:
            request_kwargs["auth"] = auth
        if payload is not None:
            request_kwargs["json"] = payload

        try:
            resp = self._client.request(method, url, **request_kwargs)
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"{method} {url} failed: {exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
                body=exc.response.text,
            ) from exc
        return resp

    def _json(self, resp: httpx.Response) -> Dict[str, Any]:
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(
                f"Broker returned a non-JSON body: {resp.text[:200]}",
                status_code=resp.status_code,
                body=resp.text,
            ) from exc

    def _broker_response(self, resp: httpx.Response) -> BrokerResponse:
        try:
            return BrokerResponse.model_validate(self._json(resp))
        except ValidationError as exc:
            raise TransportError(f"Unexpected broker response: {exc}", status_code=resp.status_code) from exc

    def create_webhook(self, webhook: Webhook) -> BrokerResponse:
        resp = self._send("POST", self._webhook_url(), webhook.broker_payload())
        return self._broker_response(resp)

    def update_webhook(self, webhook: Webhook) -> BrokerResponse:
        if not webhook.id:
            raise TransportError("Cannot update a webhook without an id")
        resp = self._send("PUT", self._webhook_url(webhook.id), webhook.broker_payload())
        return self._broker_response(resp)

    def read_webhook(self, webhook_id: str) -> Webhook:
        if not webhook_id:
            raise TransportError("Cannot read a webhook without an id")
        resp = self._send("GET", self._webhook_url(webhook_id))
        try:
            webhook = Webhook.model_validate(self._json(resp))
        except ValidationError as exc:
            raise TransportError(f"Unexpected webhook representation: {exc}", status_code=resp.status_code) from exc
        webhook.id = webhook_id
        return webhook

    def delete_webhook(self, webhook: Webhook) -> None:
        if not webhook.id:
            raise TransportError("Cannot delete a webhook without an id")
        self._send("DELETE", self._webhook_url(webhook.id))
