import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Tuple, Union

from pact_webhooks.utils.utils import lookup_path, split_path

logger = logging.getLogger(__name__)


class ResourceData(Protocol):
    """Accessors the reconciliation operations need from the schema engine's
    stored state for one resource instance."""

    @property
    def id(self) -> str: ...

    def set_id(self, resource_id: str) -> None: ...

    def get(self, key: str) -> Any: ...

    def get_ok_exists(self, key: str) -> Tuple[Any, bool]: ...

    def set(self, key: str, value: Any) -> None: ...

    def to_document(self) -> Dict[str, Any]: ...


class ResourceState:
    """Dict-backed ``ResourceData``.

    Keys are dotted paths. ``get`` returns ``None`` for absent attributes;
    ``get_ok_exists`` tells absent apart from present-but-empty values.
    """

    def __init__(self, attributes: Optional[Dict[str, Any]] = None, resource_id: str = ""):
        self._attributes: Dict[str, Any] = copy.deepcopy(attributes) if attributes else {}
        self._id = resource_id

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, resource_id: str) -> None:
        logger.debug("setting resource id to %r", resource_id)
        self._id = resource_id

    def get(self, key: str) -> Any:
        value, _ = self.get_ok_exists(key)
        return value

    def get_ok_exists(self, key: str) -> Tuple[Any, bool]:
        value, ok = lookup_path(self._attributes, key)
        if ok and value is None:
            return None, False
        return copy.deepcopy(value), ok

    def set(self, key: str, value: Any) -> None:
        parts = split_path(key)
        if not parts:
            raise KeyError(f"invalid attribute key {key!r}")
        target = self._attributes
        for part in parts[:-1]:
            child = target.get(part)
            if not isinstance(child, dict):
                child = {}
                target[part] = child
            target = child
        target[parts[-1]] = copy.deepcopy(value)

    def to_document(self) -> Dict[str, Any]:
        return copy.deepcopy(self._attributes)

    def replace(self, document: Dict[str, Any]) -> None:
        self._attributes = copy.deepcopy(document)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ResourceState":
        path = Path(path)
        if not path.exists():
            logger.info("no state file at %s, starting empty", path)
            return cls()
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(raw.get("attributes") or {}, raw.get("id") or "")

    def save(self, path: Union[str, Path]) -> None:
        payload = {"id": self._id, "attributes": self._attributes}
        Path(path).write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def __repr__(self) -> str:
        return f"ResourceState(id={self._id!r}, keys={sorted(self._attributes)})"
