"""Print the national holidays of a year.

Usage:
    shukujitsu 2024 [--format json|csv|yaml] [--log-level DEBUG]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from shukujitsu.core.config import get_settings
from shukujitsu.services.export import OutputFormat, render_holidays


def _validate_year(value: str) -> int:
    try:
        year = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Year must be an integer") from exc
    if not 1 <= year <= 9999:
        raise argparse.ArgumentTypeError("Year must be between 1 and 9999")
    return year


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="List Japanese national holidays, including substitute holidays."
    )
    parser.add_argument("year", type=_validate_year, help="Calendar year, e.g. 2024.")
    parser.add_argument(
        "--format",
        dest="output_format",
        default=settings.default_format,
        help="Output format: json, csv or yaml (unknown values fall back to json).",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging level for diagnostics written to stderr.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, stream=sys.stderr)

    output = render_holidays(args.year, OutputFormat.parse(args.output_format))
    if output is None:
        return 1
    sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
