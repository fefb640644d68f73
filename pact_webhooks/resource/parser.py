"""Desired-state document -> ``Webhook``."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from pact_webhooks.exceptions import DecodeError, MissingField, TypeMismatch
from pact_webhooks.models import Pacticipant, Request, Webhook, WebhookEvent
from pact_webhooks.utils.json_body import decode_body

logger = logging.getLogger(__name__)

_REQUEST_STRING_FIELDS = ("url", "method", "username", "password")


def parse_webhook(document: Mapping[str, Any], existing_id: str = "") -> Webhook:
    """Builds the webhook described by ``document``.

    Raises on the first problem found; nothing is returned that could be sent
    to the broker half-built.
    """
    logger.debug("parsing webhook document with keys %s", sorted(document))

    webhook = Webhook(
        description=document.get("description") or "",
        enabled=_extract_enabled(document.get("enabled")),
        provider=_decode_pacticipant(document, "webhook_provider"),
        consumer=_decode_pacticipant(document, "webhook_consumer"),
        events=_extract_events(document.get("events")),
        request=_extract_request(document.get("request")),
    )

    if existing_id:
        webhook.id = existing_id
    return webhook


def _decode_pacticipant(document: Mapping[str, Any], key: str) -> Optional[Pacticipant]:
    raw = document.get(key)
    if not raw:
        return None
    logger.debug("raw %s %r", key, raw)
    try:
        return Pacticipant.model_validate(raw)
    except ValidationError as e:
        logger.error("error decoding webhook config: %s: %s", key, e)
        raise DecodeError(key, e) from e


def _extract_events(raw: Any) -> List[WebhookEvent]:
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise TypeMismatch("events", raw)

    events = []
    for item in raw:
        if item is None:
            continue
        if not isinstance(item, str):
            raise TypeMismatch("events", item)
        events.append(WebhookEvent(name=item))
    return events


def _request_block(raw: Any) -> Mapping[str, Any]:
    # nested blocks arrive either as a mapping or as a one-element list
    if isinstance(raw, (list, tuple)):
        if not raw:
            raise MissingField("request")
        raw = raw[0]
    if raw is None:
        raise MissingField("request")
    if not isinstance(raw, Mapping):
        raise TypeMismatch("request", raw)
    return raw


def _extract_headers(block: Mapping[str, Any]) -> Dict[str, str]:
    raw = block.get("headers")
    if raw is None:
        logger.error("'headers' is a required field")
        raise MissingField("headers")
    if not isinstance(raw, Mapping):
        logger.error("unable to parse request headers into a mapping, got %s", type(raw).__name__)
        raise TypeMismatch("headers", raw)

    headers = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not isinstance(value, str):
            logger.error("request header %r has non-string value of type %s", key, type(value).__name__)
            raise TypeMismatch("headers", value)
        headers[key] = value
    return headers


def _extract_enabled(raw: Any) -> bool:
    if raw is None:
        return True
    if not isinstance(raw, bool):
        raise TypeMismatch("enabled", raw)
    return raw


def _extract_body(block: Mapping[str, Any]) -> Tuple[bool, Any]:
    """Returns ``(present, value)``; a present body may decode to ``None``."""
    raw = block.get("body")
    if raw is None or raw == "":
        return False, None
    if not isinstance(raw, str):
        raise TypeMismatch("body", raw)
    try:
        return True, decode_body(raw)
    except ValueError as e:
        logger.error("unable to deserialise body JSON of %d characters: %s", len(raw), e)
        raise DecodeError("body", e, raw) from e


def _optional_string(block: Mapping[str, Any], name: str) -> Optional[str]:
    value = block.get(name)
    if value is not None and not isinstance(value, str):
        raise TypeMismatch(name, value)
    return value


@dataclass(frozen=True)
class RequestBlock:
    """The ``request`` block after shape checks, before it becomes a ``Request``."""

    url: str = ""
    method: str = ""
    username: Optional[str] = None
    password: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    has_body: bool = False
    body: Any = None

    @classmethod
    def from_mapping(cls, block: Mapping[str, Any]) -> "RequestBlock":
        strings = {name: _optional_string(block, name) for name in _REQUEST_STRING_FIELDS}
        headers = _extract_headers(block)
        has_body, body = _extract_body(block)
        return cls(
            url=strings["url"] or "",
            method=strings["method"] or "",
            username=strings["username"],
            password=strings["password"],
            headers=headers,
            has_body=has_body,
            body=body,
        )

    def to_request(self) -> Request:
        fields: Dict[str, Any] = {
            "url": self.url,
            "method": self.method,
            "username": self.username,
            "password": self.password,
            "headers": dict(self.headers),
        }
        # only a present body is marked as set, so JSON null survives
        if self.has_body:
            fields["body"] = self.body
        return Request(**fields)


def _extract_request(raw: Any) -> Request:
    if raw is None:
        logger.error("request attribute not found")
        raise MissingField("request")

    request = RequestBlock.from_mapping(_request_block(raw)).to_request()
    logger.debug("have request for %s %s", request.method, request.url)
    return request
