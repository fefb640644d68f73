"""``Webhook`` -> stored-state document.

The projection is deliberately lossy: participants keep only their name, and
the password the broker masks on read is replaced by the last value we knew.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from pact_webhooks.exceptions import EncodeError
from pact_webhooks.models import Pacticipant, Request, Webhook
from pact_webhooks.utils.json_body import encode_body

logger = logging.getLogger(__name__)

MASK_PREFIX = "*****"
PASSWORD_PATH = "request.password"

PriorValueLookup = Callable[[str], Optional[str]]


def no_prior_value(key: str) -> Optional[str]:
    return None


def is_masked(password: Optional[str]) -> bool:
    return bool(password) and password.startswith(MASK_PREFIX)


def project_webhook(
    webhook: Webhook,
    prior_password: PriorValueLookup = no_prior_value,
) -> Tuple[Dict[str, Any], Optional[EncodeError]]:
    """Returns the document for ``webhook`` and the body encode error, if any.

    A body that cannot be encoded does not stop the projection: the document
    is still complete apart from an empty ``request.body``.
    """
    request, error = project_request(webhook.request, prior_password)
    document = {
        "description": webhook.description,
        "enabled": webhook.enabled,
        "webhook_consumer": _flatten_pacticipant(webhook.consumer),
        "webhook_provider": _flatten_pacticipant(webhook.provider),
        "events": flatten_events(webhook),
        "request": request,
    }
    return document, error


def _flatten_pacticipant(pacticipant: Optional[Pacticipant]) -> Dict[str, Any]:
    if pacticipant is None:
        return {}
    return {"name": pacticipant.name}


def flatten_events(webhook: Webhook) -> List[str]:
    return [event.name for event in webhook.events]


def project_request(
    request: Request,
    prior_password: PriorValueLookup = no_prior_value,
) -> Tuple[Dict[str, Any], Optional[EncodeError]]:
    projected: Dict[str, Any] = {
        "url": request.url,
        "method": request.method,
        "username": request.username,
    }

    if request.password and not is_masked(request.password):
        # first time we see it, take it as is
        projected["password"] = request.password
    else:
        original = prior_password(PASSWORD_PATH)
        if original is not None:
            projected["password"] = original
        else:
            logger.debug("could not find original value for 'password'")

    projected["headers"] = {key: value for key, value in request.headers.items()}

    error = None
    if request.has_body:
        try:
            projected["body"] = encode_body(request.body)
        except (TypeError, ValueError) as e:
            error = EncodeError("body", e)
            projected["body"] = ""
    return projected, error
