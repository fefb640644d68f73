import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pact_webhooks.config import settings
from pact_webhooks.exceptions import WebhookError
from pact_webhooks.resource import (
    ResourceState,
    apply_defaults,
    create,
    delete,
    read,
    update,
    validate_document,
)
from pact_webhooks.services import broker_client

logger = logging.getLogger("pact_webhooks")


def load_document(path: str) -> Dict[str, Any]:
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(document, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return document


def check_document(document: Dict[str, Any]) -> bool:
    _, errors = validate_document(document)
    for error in errors:
        logger.error("invalid webhook document: %s", error)
    return not errors


def run_validate(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    if not check_document(document):
        return 1
    logger.info("%s is valid", args.document)
    return 0


def run_apply(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    if not check_document(document):
        return 1

    state = ResourceState.load(args.state)
    if args.command == "update" and not state.id:
        logger.error("%s has no webhook id, create it first", args.state)
        return 1
    state.replace(apply_defaults(document))

    with broker_client() as client:
        if args.command == "create":
            create(state, client)
        else:
            update(state, client)
    state.save(args.state)
    print(state.id)
    return 0


def run_read(args: argparse.Namespace) -> int:
    state = ResourceState.load(args.state)
    if not state.id:
        logger.error("%s has no webhook id", args.state)
        return 1

    with broker_client() as client:
        read(state, client)
    state.save(args.state)
    if not state.id:
        logger.warning("webhook no longer exists on the broker")
    return 0


def run_delete(args: argparse.Namespace) -> int:
    state = ResourceState.load(args.state)
    if not state.id:
        logger.error("%s has no webhook id", args.state)
        return 1

    with broker_client() as client:
        delete(state, client)
    state.save(args.state)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage a Pact Broker webhook from a JSON document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m pact_webhooks.main validate webhook.json
  python -m pact_webhooks.main create webhook.json --state webhook.state.json
  python -m pact_webhooks.main read --state webhook.state.json
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Validate a webhook document")
    validate_parser.add_argument("document", help="Path to the desired-state JSON document")
    validate_parser.set_defaults(func=run_validate)

    for command in ("create", "update"):
        apply_parser = subparsers.add_parser(command, help=f"{command.capitalize()} the webhook on the broker")
        apply_parser.add_argument("document", help="Path to the desired-state JSON document")
        apply_parser.add_argument("--state", required=True, help="Path to the state file")
        apply_parser.set_defaults(func=run_apply)

    read_parser = subparsers.add_parser("read", help="Refresh the state file from the broker")
    read_parser.add_argument("--state", required=True, help="Path to the state file")
    read_parser.set_defaults(func=run_read)

    delete_parser = subparsers.add_parser("delete", help="Delete the webhook from the broker")
    delete_parser.add_argument("--state", required=True, help="Path to the state file")
    delete_parser.set_defaults(func=run_delete)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (WebhookError, ValueError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
