from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from trackform import __version__
from trackform.adapters.manifest import ManifestError
from trackform.app import apply_manifest, delete_resources, list_resources, parse_repository_key
from trackform.config import configure_logging
from trackform.domain.model import ResourceKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from trackform.domain.convergence import ConvergenceResult

log = logging.getLogger(__name__)

KIND_CHOICES: dict[str, ResourceKind] = {
    "team": ResourceKind.TEAM,
    "permission": ResourceKind.PERMISSION,
    "oidc-group": ResourceKind.OIDC_GROUP,
    "repository": ResourceKind.REPOSITORY,
    "config-property": ResourceKind.CONFIG_PROPERTY,
}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Converge a Dependency-Track server to a declared configuration"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging verbosity (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply = subparsers.add_parser("apply", help="Apply a TOML manifest")
    apply.add_argument("manifest", type=Path, help="Path to the manifest file")
    apply.add_argument(
        "--dry-run",
        action="store_true",
        help="Plan and report changes without modifying the server",
    )

    list_cmd = subparsers.add_parser("list", help="List remote objects of one kind")
    list_cmd.add_argument("kind", choices=sorted(KIND_CHOICES), help="Object kind")

    delete = subparsers.add_parser("delete", help="Delete remote objects by key")
    delete.add_argument("kind", choices=sorted(KIND_CHOICES), help="Object kind")
    delete.add_argument(
        "keys",
        nargs="+",
        help="Names, or TYPE/identifier for repositories",
    )

    return parser.parse_args(list(argv))


def _validate_args(args: argparse.Namespace) -> None:
    if args.command == "delete" and KIND_CHOICES[args.kind] is ResourceKind.REPOSITORY:
        for key in args.keys:
            parse_repository_key(key)


def _report(result: ConvergenceResult) -> None:
    verb = "Would apply" if result.dry_run else "Applied"
    for change in result.changes:
        if change.changed:
            log.info("%s: %s %s %s", verb, change.action, change.kind, change.label)
        for relation in change.relations:
            for key in relation.added:
                log.info("%s: add %s %s to %s", verb, relation.kind, key, change.label)
            for key in relation.removed:
                log.info("%s: remove %s %s from %s", verb, relation.kind, key, change.label)
    if not result.changed:
        log.info("Everything is up to date")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=parsed_args.log_level)
    try:
        _validate_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "apply":
            _report(apply_manifest(parsed_args.manifest, dry_run=parsed_args.dry_run))
        elif parsed_args.command == "list":
            for line in list_resources(KIND_CHOICES[parsed_args.kind]):
                print(line)  # noqa: T201
        elif parsed_args.command == "delete":
            deleted = delete_resources(KIND_CHOICES[parsed_args.kind], parsed_args.keys)
            missing = sorted(set(parsed_args.keys) - set(deleted))
            if missing:
                log.warning("Not found: %s", ", ".join(missing))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ManifestError:
        log.exception("Invalid manifest")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
