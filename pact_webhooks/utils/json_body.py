import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


def decode_body(text: str) -> Any:
    return json.loads(text)


def encode_body(body: Any) -> str:
    # compact and key-sorted, the same text the broker produces
    return json.dumps(body, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _decode_object(text: Any) -> Optional[dict]:
    try:
        decoded = json.loads(text)
    except (TypeError, ValueError):
        return None
    if not isinstance(decoded, dict):
        return None
    return decoded


def json_equal(left: Any, right: Any) -> bool:
    """Structural equality of decoded JSON values.

    Numbers compare by value whatever their Python type, but a bool is never
    equal to a number.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, dict) and isinstance(right, dict):
        if left.keys() != right.keys():
            return False
        return all(json_equal(left[k], right[k]) for k in left)
    if isinstance(left, list) and isinstance(right, list):
        if len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))
    if type(left) is not type(right):
        return False
    return left == right


def bodies_equivalent(old_text: Any, new_text: Any) -> bool:
    """True when both texts decode to the same JSON object.

    Anything that does not decode to an object counts as a real change.
    """
    logger.debug(
        "comparing bodies of %d and %d characters",
        len(old_text) if isinstance(old_text, str) else 0,
        len(new_text) if isinstance(new_text, str) else 0,
    )
    old_body = _decode_object(old_text)
    if old_body is None:
        return False
    new_body = _decode_object(new_text)
    if new_body is None:
        return False
    return json_equal(old_body, new_body)
