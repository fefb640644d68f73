"""Attribute table for the webhook resource and the hooks a schema engine calls
on it: per-attribute validators, required checks, defaults and diff
suppression for ``request.body``."""

import copy
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from pact_webhooks.exceptions import MissingField, TypeMismatch
from pact_webhooks.utils.json_body import bodies_equivalent
from pact_webhooks.utils.utils import split_path
from pact_webhooks.utils.validators import (
    ValidationResult,
    Validator,
    validate_body_json,
    validate_event,
    validate_method,
    validate_url,
)

logger = logging.getLogger(__name__)

DiffSuppressFunc = Callable[[str, str, str], bool]


class Attribute(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type: str
    elem: Optional[str] = None
    description: str = ""
    required: bool = False
    default: Any = None
    sensitive: bool = False
    validator: Optional[Validator] = None
    diff_suppress: Optional[DiffSuppressFunc] = None


def _body_diff_suppress(key: str, old: str, new: str) -> bool:
    return bodies_equivalent(old, new)


PACTICIPANT_ATTRIBUTE = Attribute(
    type="map",
    description="The pacticipant the webhook is scoped to, by name",
)

WEBHOOK_SCHEMA: Dict[str, Attribute] = {
    "description": Attribute(type="string", description="A short description of the webhook"),
    "enabled": Attribute(type="bool", default=True, description="Whether the webhook fires"),
    "webhook_provider": PACTICIPANT_ATTRIBUTE,
    "webhook_consumer": PACTICIPANT_ATTRIBUTE,
    "events": Attribute(
        type="list",
        description="Events that trigger the webhook",
        validator=validate_event,
    ),
    "request": Attribute(type="block", required=True, description="The request to send"),
    "request.url": Attribute(
        type="string",
        required=True,
        validator=validate_url,
        description="A valid URL to send the webhook request to",
    ),
    "request.method": Attribute(
        type="string",
        required=True,
        validator=validate_method,
        description="The HTTP method to use with the request",
    ),
    "request.username": Attribute(
        type="string",
        description="An optional (basic auth) username to send with the request",
    ),
    "request.password": Attribute(
        type="string",
        sensitive=True,
        description="An optional (basic auth) password to send with the request",
    ),
    "request.headers": Attribute(
        type="map",
        elem="string",
        required=True,
        description="Request headers to send with the request",
    ),
    "request.body": Attribute(
        type="string",
        validator=validate_body_json,
        diff_suppress=_body_diff_suppress,
        description="A request body to send with the request",
    ),
}

_PYTHON_TYPES = {
    "string": str,
    "bool": bool,
    "map": Mapping,
    "list": (list, tuple),
}


def normalize_key(key: str) -> str:
    """Drops list indexes, so ``request.0.body`` becomes ``request.body``."""
    return ".".join(part for part in split_path(key) if not part.isdigit())


def diff_suppress(key: str, old: str, new: str) -> bool:
    attribute = WEBHOOK_SCHEMA.get(normalize_key(key))
    if attribute is None or attribute.diff_suppress is None:
        return False
    suppressed = attribute.diff_suppress(key, old, new)
    if suppressed:
        logger.debug("suppressing diff on %s", key)
    return suppressed


REDACTED = "(sensitive value)"


def redact_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``document`` with every sensitive attribute that is set masked,
    fit for logging."""
    result = copy.deepcopy(dict(document))
    for key, attribute in WEBHOOK_SCHEMA.items():
        if not attribute.sensitive:
            continue
        *parents, name = key.split(".")
        blocks = [result]
        for parent in parents:
            nested = []
            for block in blocks:
                child = block.get(parent)
                if isinstance(child, (list, tuple)):
                    nested.extend(item for item in child if isinstance(item, dict))
                elif isinstance(child, dict):
                    nested.append(child)
            blocks = nested
        for block in blocks:
            if block.get(name) is not None:
                block[name] = REDACTED
    return result


def apply_defaults(document: Mapping[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(dict(document))
    for key, attribute in WEBHOOK_SCHEMA.items():
        if "." in key or attribute.default is None:
            continue
        if result.get(key) is None:
            result[key] = attribute.default
    return result


def _check(attribute: Attribute, key: str, value: Any) -> ValidationResult:
    expected = _PYTHON_TYPES.get(attribute.type)
    if expected is not None and not isinstance(value, expected):
        return [], [TypeMismatch(key, value)]
    if attribute.type == "map" and attribute.elem == "string":
        for item in value.values():
            if not isinstance(item, str):
                return [], [TypeMismatch(key, item)]
    if attribute.type == "list" and attribute.validator is not None:
        warnings: List[str] = []
        errors: List[Exception] = []
        for index, item in enumerate(value):
            if item is None:
                continue
            item_warnings, item_errors = attribute.validator(item, f"{key}.{index}")
            warnings.extend(item_warnings)
            errors.extend(item_errors)
        return warnings, errors
    if attribute.validator is not None:
        return attribute.validator(value, key)
    return [], []


def _request_block(raw: Any) -> Tuple[Optional[Mapping[str, Any]], List[Exception]]:
    if isinstance(raw, (list, tuple)):
        if len(raw) > 1:
            return None, [TypeMismatch("request", raw)]
        raw = raw[0] if raw else None
    if raw is None:
        return None, [MissingField("request")]
    if not isinstance(raw, Mapping):
        return None, [TypeMismatch("request", raw)]
    return raw, []


def validate_document(document: Mapping[str, Any]) -> ValidationResult:
    """Runs every check on ``document`` and returns all findings at once."""
    warnings: List[str] = []
    errors: List[Exception] = []

    for key, attribute in WEBHOOK_SCHEMA.items():
        if "." in key or attribute.type == "block":
            continue
        value = document.get(key)
        if value is None:
            if attribute.required:
                errors.append(MissingField(key))
            continue
        w, e = _check(attribute, key, value)
        warnings.extend(w)
        errors.extend(e)

    block, block_errors = _request_block(document.get("request"))
    errors.extend(block_errors)
    if block is not None:
        for key, attribute in WEBHOOK_SCHEMA.items():
            if not key.startswith("request."):
                continue
            name = key.split(".", 1)[1]
            value = block.get(name)
            if value is None:
                if attribute.required:
                    errors.append(MissingField(key))
                continue
            if name == "body" and value == "":
                continue
            w, e = _check(attribute, key, value)
            warnings.extend(w)
            errors.extend(e)

    for warning in warnings:
        logger.warning(warning)
    return warnings, errors
