#!/usr/bin/env python3
"""Access Report - Entry point"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from access_report import (
    VERSION, AccessReportError, ArgumentError, LineParser, LogSource,
    aggregate, filter_records, print_report, render,
)
from access_report.output import resolve_format

logger = logging.getLogger('access_report')

console = Console(stderr=True)


def parse_bound(value: Optional[str], name: str) -> Optional[datetime]:
    """ISO-8601 date-time; naive values and a trailing Z are taken as UTC"""
    if value is None or value.strip() in ('', '-'):
        return None
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ArgumentError(f"Invalid {name} timestamp {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Access Report - Web server access log summary",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("source", help="Log URL (http/https) or file glob pattern")
    parser.add_argument("from_date", nargs="?", metavar="from",
                        help="Exclusive lower bound, ISO-8601 (use - for none)")
    parser.add_argument("to_date", nargs="?", metavar="to",
                        help="Exclusive upper bound, ISO-8601 (use - for none)")
    parser.add_argument("format", nargs="?", default="markdown",
                        help="Output format: markdown (default) or adoc")
    parser.add_argument("--strict", action="store_true",
                        help="Abort on the first malformed line instead of skipping it")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"AccessReport v{VERSION}")
    return parser


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def run(args, out: Optional[Console] = None) -> int:
    from_date = parse_bound(args.from_date, 'from')
    to_date = parse_bound(args.to_date, 'to')
    if from_date and to_date and to_date <= from_date:
        raise ArgumentError("The 'to' bound must be after the 'from' bound")
    fmt = resolve_format(args.format)

    source = LogSource(args.source)
    line_parser = LineParser(strict=args.strict, console=console if console.is_terminal else None)
    records = line_parser.parse_lines(source)
    if line_parser.skipped:
        logger.warning("Skipped %d malformed line(s)", line_parser.skipped)

    filtered = filter_records(records, from_date, to_date)
    logger.debug("%d of %d records within bounds", len(filtered), len(records))

    report = aggregate(
        filtered, from_date, to_date,
        sources=tuple(source.labels),
        skipped_lines=line_parser.skipped,
    )
    print_report(render(report, fmt), out)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        return run(args)
    except ArgumentError as e:
        logger.error("Error: %s", e)
        return 2
    except AccessReportError as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
