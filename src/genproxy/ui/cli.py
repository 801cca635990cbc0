# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from genproxy.app import dry_run_plan, plan_proxy_modification, plan_proxy_registration
from genproxy.config import NETWORK_NAMES, ConfigurationError, configure_logging, resolve_endpoint
from genproxy.domain.errors import ProxyConfigError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from genproxy.app import PlanReport

log = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--sudo",
        action="store_true",
        help="Wrap the batch in the privileged (sudo) envelope",
    )
    parser.add_argument(
        "--call-indices",
        type=str,
        help="TOML file with the runtime call index table (default: $GENPROXY_CALL_INDICES)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Execute the final call on the simulated endpoint (requires --sudo)",
    )
    endpoint = parser.add_mutually_exclusive_group()
    endpoint.add_argument("--url", type=str, help="Ledger RPC url")
    endpoint.add_argument("--network", type=str, choices=NETWORK_NAMES, help="Known network")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan genesis proxy configuration changes")
    subparsers = parser.add_subparsers(dest="command", required=True)

    modify = subparsers.add_parser(
        "modify",
        help="Reconcile an OLD proxy configuration CSV against a NEW one",
    )
    modify.add_argument(
        "--proxy-file",
        "--pf",
        dest="proxy_file",
        type=str,
        required=True,
        help="CSV file with the NEW proxy configuration",
    )
    modify.add_argument(
        "--proxy-file-old",
        "--pold",
        dest="proxy_file_old",
        type=str,
        required=True,
        help="CSV file with the OLD proxy configuration",
    )
    _add_common_arguments(modify)

    register = subparsers.add_parser("register", help="Register every proxy listed in a CSV")
    register.add_argument(
        "--proxy-file",
        "--pf",
        dest="proxy_file",
        type=str,
        required=True,
        help="CSV file with the proxy configuration",
    )
    _add_common_arguments(register)

    return parser.parse_args(list(argv))


def _print_report(report: PlanReport, *, nothing_to_do_message: str) -> None:
    print()
    for line in report.outcome.summary.render():
        print(line)
    if report.nothing_to_do:
        print(f"\n{nothing_to_do_message}")
        return
    print("\n--- BATCH TX HEX ---")
    print(report.batch_hex)
    print("\n--- FINAL TX HEX ---")
    print(report.final_hex)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        if parsed_args.command == "modify":
            report = plan_proxy_modification(
                new_path=parsed_args.proxy_file,
                old_path=parsed_args.proxy_file_old,
                privileged=parsed_args.sudo,
                call_indices_path=parsed_args.call_indices,
            )
            message = "Nothing to do: old and new proxy configurations are identical."
        elif parsed_args.command == "register":
            report = plan_proxy_registration(
                path=parsed_args.proxy_file,
                privileged=parsed_args.sudo,
                call_indices_path=parsed_args.call_indices,
            )
            message = "Nothing to do."
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

        _print_report(report, nothing_to_do_message=message)

        if parsed_args.dry_run:
            endpoint = resolve_endpoint(url=parsed_args.url, network=parsed_args.network)
            dry_run_plan(report, endpoint=endpoint)

    except (ProxyConfigError, ConfigurationError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while planning proxy changes")
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
