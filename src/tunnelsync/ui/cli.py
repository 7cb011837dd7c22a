# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from tunnelsync.adapters.changes_file import ChangesFileError, load_change_batch
from tunnelsync.app import apply_tunnel_endpoint_changes, list_tunnel_endpoints
from tunnelsync.config import ConfigurationError, configure_logging, get_domain_filter
from tunnelsync.domain.errors import InvalidChangeBatchError, TunnelConfigError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Synchronise DNS records with a Cloudflare tunnel's ingress rules"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--domain-filter",
        action="append",
        default=[],
        help="Only touch hostnames within this domain (repeatable)",
    )
    common.add_argument(
        "--exclude-domain",
        action="append",
        default=[],
        help="Never touch hostnames within this domain (repeatable)",
    )
    common.add_argument(
        "--timeout",
        type=float,
        help="Seconds allowed for each tunnel API call",
    )

    subparsers.add_parser(
        "records",
        parents=[common],
        help="List records routed by the tunnel",
    )

    apply = subparsers.add_parser(
        "apply",
        parents=[common],
        help="Apply a change batch to the tunnel",
    )
    apply.add_argument(
        "--changes",
        type=Path,
        required=True,
        help="JSON file with create/update_old/update_new/delete record lists",
    )
    apply.add_argument(
        "--owner",
        type=str,
        help="Owner shown in notifications (defaults to TUNNELSYNC_OWNER)",
    )
    apply.add_argument(
        "--no-notify",
        action="store_true",
        help="Do not send a Slack notification",
    )

    return parser.parse_args(list(argv))


def _run_records(args: argparse.Namespace) -> None:
    result = list_tunnel_endpoints(
        domain_filter=get_domain_filter(include=args.domain_filter, exclude=args.exclude_domain),
        timeout=args.timeout,
    )
    for record in result.records:
        print(f"{record.name} {record.record_type} {' '.join(record.targets)}")


def _run_apply(args: argparse.Namespace) -> None:
    batch = load_change_batch(args.changes)
    result = apply_tunnel_endpoint_changes(
        batch,
        notify=not args.no_notify,
        owner=args.owner,
        domain_filter=get_domain_filter(include=args.domain_filter, exclude=args.exclude_domain),
        timeout=args.timeout,
    )
    print(f"Outcome: {result.outcome}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    if parsed_args.timeout is not None and parsed_args.timeout <= 0:
        log.error("--timeout must be positive")
        sys.exit(2)

    try:
        if parsed_args.command == "records":
            _run_records(parsed_args)
        elif parsed_args.command == "apply":
            _run_apply(parsed_args)
    except (ConfigurationError, ChangesFileError, InvalidChangeBatchError) as exc:
        log.error("%s", exc)
        sys.exit(2)
    except TunnelConfigError as exc:
        log.error("Tunnel sync failed: %s", exc)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
