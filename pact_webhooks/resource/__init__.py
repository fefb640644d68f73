from pact_webhooks.resource.operations import create, delete, read, set_webhook_state, update
from pact_webhooks.resource.parser import parse_webhook
from pact_webhooks.resource.projector import MASK_PREFIX, PASSWORD_PATH, project_webhook
from pact_webhooks.resource.schema import WEBHOOK_SCHEMA, apply_defaults, diff_suppress, validate_document
from pact_webhooks.resource.state import ResourceData, ResourceState

__all__ = [
    "create",
    "delete",
    "read",
    "set_webhook_state",
    "update",
    "parse_webhook",
    "MASK_PREFIX",
    "PASSWORD_PATH",
    "project_webhook",
    "WEBHOOK_SCHEMA",
    "apply_defaults",
    "diff_suppress",
    "validate_document",
    "ResourceData",
    "ResourceState",
]
