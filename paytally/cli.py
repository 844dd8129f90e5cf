"""paytally command line: process a transactions CSV, print account balances.

Usage:
    paytally transactions.csv > accounts.csv
    paytally transactions.csv --on-error skip --log-level INFO

Exit status: 0 on success, 1 when processing fails, 2 on usage or
configuration errors.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from typing import TextIO

from paytally.core.result import Err, Ok
from paytally.gateway.csv_io import read_records, write_snapshots
from paytally.infra.config import (
    LOG_LEVELS,
    EngineConfig,
    ErrorPolicy,
    load_config,
)
from paytally.ledger.engine import Ledger
from paytally.pipeline import process

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paytally",
        description="Apply deposits, withdrawals and disputes to client accounts "
                    "and print the resulting balances as CSV.",
    )
    parser.add_argument("file", help="Transactions CSV (type,client,tx,amount)")
    parser.add_argument(
        "--on-error",
        choices=[p.value for p in ErrorPolicy],
        default=None,
        help="abort on the first rejected record (default) or skip it",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="diagnostics written to stderr (default WARNING)",
    )
    return parser


def run(config: EngineConfig, source: TextIO, out: TextIO) -> int:
    """Process source into out under config. Returns the exit status."""
    ledger = Ledger()
    match process(read_records(source), ledger, config.error_policy):
        case Err(error):
            print(f"paytally: {error.code}: {error.message}", file=sys.stderr)
            return 1
        case Ok(summary):
            for skipped in summary.skipped:
                logger.info("Skipped: %s", skipped.message)
    write_snapshots(ledger.snapshots(), out, config.display_places)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    match load_config(os.environ):
        case Err(error):
            print(f"paytally: {error.message}", file=sys.stderr)
            return 2
        case Ok(config):
            pass
    if args.on_error is not None:
        config = replace(config, error_policy=ErrorPolicy(args.on_error))
    if args.log_level is not None:
        config = replace(config, log_level=args.log_level)

    logging.basicConfig(
        stream=sys.stderr,
        level=config.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        source = open(args.file, newline="", encoding="utf-8")  # noqa: SIM115
    except OSError as exc:
        print(f"paytally: cannot open {args.file}: {exc.strerror}", file=sys.stderr)
        return 1
    with source:
        return run(config, source, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
