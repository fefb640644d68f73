"""Error taxonomy for parsing, projecting and reconciling webhooks."""

from typing import Any, Optional


class WebhookError(Exception):
    """Base class for every error raised by this package."""


class WebhookValidationError(WebhookError):
    """A single attribute value failed a domain constraint."""

    def __init__(self, key: str, value: Any, message: str):
        self.key = key
        self.value = value
        super().__init__(message)


class InvalidEnum(WebhookValidationError):
    pass


class InvalidURL(WebhookValidationError):
    pass


class InvalidMethod(WebhookValidationError):
    pass


class MissingField(WebhookError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is a mandatory field")


class TypeMismatch(WebhookError):
    def __init__(self, field: str, got: Any = None):
        self.field = field
        self.got = got
        super().__init__(f"unable to parse {field}: unexpected type {type(got).__name__}")


class DecodeError(WebhookError):
    """Raised when a block of the desired-state document cannot be decoded."""

    def __init__(self, field: str, cause: Exception, text: Optional[str] = None):
        self.field = field
        self.cause = cause
        self.text = text
        super().__init__(f"error decoding {field}: {cause}")


class EncodeError(WebhookError):
    def __init__(self, field: str, cause: Exception):
        self.field = field
        self.cause = cause
        super().__init__(f"error encoding {field}: {cause}")


class TransportError(WebhookError):
    """The broker call failed, either on the network or with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


__all__ = [
    "WebhookError",
    "WebhookValidationError",
    "InvalidEnum",
    "InvalidURL",
    "InvalidMethod",
    "MissingField",
    "TypeMismatch",
    "DecodeError",
    "EncodeError",
    "TransportError",
]
