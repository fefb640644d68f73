from pact_webhooks.utils.json_body import (
    bodies_equivalent,
    decode_body,
    encode_body,
    json_equal,
)
from pact_webhooks.utils.utils import (
    id_from_href,
    is_absolute_url,
    lookup_path,
    split_path,
)
from pact_webhooks.utils.validators import (
    ALLOWED_EVENTS,
    ALLOWED_METHODS,
    is_allowed_event,
    validate_body_json,
    validate_event,
    validate_method,
    validate_url,
)

__all__ = [
    "bodies_equivalent",
    "decode_body",
    "encode_body",
    "json_equal",
    "id_from_href",
    "is_absolute_url",
    "lookup_path",
    "split_path",
    "ALLOWED_EVENTS",
    "ALLOWED_METHODS",
    "is_allowed_event",
    "validate_body_json",
    "validate_event",
    "validate_method",
    "validate_url",
]
