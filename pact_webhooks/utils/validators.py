"""Attribute validators.

Every validator follows the schema-engine hook signature
``validator(value, key) -> (warnings, errors)`` and never raises.
"""

import json
from typing import Any, Callable, List, Tuple

from pact_webhooks.exceptions import InvalidEnum, InvalidMethod, InvalidURL
from pact_webhooks.utils.utils import is_absolute_url

ValidationResult = Tuple[List[str], List[Exception]]
Validator = Callable[[Any, str], ValidationResult]

ALLOWED_EVENTS = frozenset(
    {
        "contract_changed_event",
        "contract_published",
        "provider_verification_published",
    }
)
ALLOWED_METHODS = frozenset({"GET", "PUT", "PATCH", "POST", "DELETE"})

_SORTED_EVENTS = tuple(sorted(ALLOWED_EVENTS))
_METHODS_DISPLAY = ", ".join(("GET", "PUT", "PATCH", "POST", "DELETE"))


def is_allowed_event(value: Any) -> bool:
    return isinstance(value, str) and value in ALLOWED_EVENTS


def validate_event(value: Any, key: str = "events") -> ValidationResult:
    errors: List[Exception] = []
    if not is_allowed_event(value):
        errors.append(
            InvalidEnum(
                key,
                value,
                f"{key!r} must be one of the allowed events {list(_SORTED_EVENTS)}, got {value!r}",
            )
        )
    return [], errors


def validate_url(value: Any, key: str = "url") -> ValidationResult:
    errors: List[Exception] = []
    if not isinstance(value, str) or not is_absolute_url(value):
        errors.append(InvalidURL(key, value, f"{key!r} must be a valid absolute URL, got {value!r}"))
    return [], errors


def validate_method(value: Any, key: str = "method") -> ValidationResult:
    errors: List[Exception] = []
    if not isinstance(value, str) or value not in ALLOWED_METHODS:
        errors.append(
            InvalidMethod(
                key,
                value,
                f"{key!r} must be one of the following HTTP verbs '{_METHODS_DISPLAY}', got {value!r}",
            )
        )
    return [], errors


def validate_body_json(value: Any, key: str = "body") -> ValidationResult:
    warnings: List[str] = []
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError) as e:
        warnings.append(f"Body provided for {key!r} is not a valid JSON body. {e}")
        return warnings, []
    if not isinstance(decoded, dict):
        warnings.append(
            f"Body provided for {key!r} is not a valid JSON body. "
            f"Expected an object, got {type(decoded).__name__}"
        )
    return warnings, []
