#!/usr/bin/env python
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from sendcheck import __version__


def _repo_root() -> Path:
    return Path.cwd().resolve()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sendcheck",
        description="sendcheck - resolve failed pre-flight checks before sending a message",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    check_p = subparsers.add_parser("check", help="Check a message and resolve failures")
    check_p.add_argument("message", help="Path to message prototype JSON ('-' for stdin)")
    check_p.add_argument("--rpc-url", help="Validation service JSON-RPC endpoint")
    check_p.add_argument("--token", help="Bearer token for the validation service")
    # SUPPRESS keeps a top-level -v from being reset by the subcommand default
    check_p.add_argument(
        "--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Verbose logging"
    )
    check_p.add_argument(
        "--interactive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Offer fixes and confirmation prompts (default: when stdin is a terminal)",
    )
    check_p.add_argument(
        "--fee-unit",
        choices=["fil", "attofil"],
        help="Unit used for the fee editor's price field (default: fil)",
    )

    subparsers.add_parser("version", help="Show version")
    return parser


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Suppress verbose debug logs from HTTP libraries
    for lib in ["httpcore", "httpx"]:
        logging.getLogger(lib).setLevel(logging.WARNING)
    logging.getLogger("sendcheck").setLevel(logging.DEBUG if verbose else logging.INFO)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    load_dotenv(_repo_root() / ".env")
    _configure_logging(args.verbose)

    if args.command == "version":
        print(f"sendcheck {__version__}")
        return 0

    if args.command is None:
        parser.print_help()
        return 1

    from sendcheck.cli.commands import check
    from sendcheck.config import SendCheckConfig, set_config

    try:
        config = SendCheckConfig.from_env()
        if args.rpc_url:
            config.rpc_url = args.rpc_url
        if args.token:
            config.rpc_token = args.token
        if args.interactive is not None:
            config.interactive = args.interactive
        if args.fee_unit:
            config.fee_unit = args.fee_unit
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    set_config(config)

    return check.run(args.message, config)


if __name__ == "__main__":
    sys.exit(main())
