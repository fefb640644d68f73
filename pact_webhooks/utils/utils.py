from typing import Any, List, Optional, Tuple
from urllib.parse import urlparse

from pydantic import AnyUrl, TypeAdapter, ValidationError

_URL_ADAPTER = TypeAdapter(AnyUrl)


def id_from_href(href: str) -> str:
    """Returns the last path segment of a resource link, e.g. the webhook UUID
    of ``https://broker/webhooks/AbC123``."""
    path = urlparse(href).path if "://" in href else href
    return path.rstrip("/").split("/")[-1]


def is_absolute_url(value: str) -> bool:
    # the URL parser drops tabs and newlines silently, so refuse them first
    if any(ch.isspace() or not ch.isprintable() for ch in value):
        return False
    try:
        url = _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return bool(url.scheme) and bool(url.host)


def split_path(key: str) -> List[str]:
    return [part for part in key.split(".") if part]


def lookup_path(document: Any, key: str) -> Tuple[Optional[Any], bool]:
    """Walks a dotted path through nested mappings and lists.

    Numeric segments index into lists; a non-numeric segment applied to a
    single-element list descends into that element, so ``request.password``
    and ``request.0.password`` resolve to the same value.
    """
    current = document
    for part in split_path(key):
        if isinstance(current, list):
            if part.isdigit():
                index = int(part)
                if index >= len(current):
                    return None, False
                current = current[index]
                continue
            if len(current) != 1:
                return None, False
            current = current[0]
        if not isinstance(current, dict) or part not in current:
            return None, False
        current = current[part]
    return current, True
