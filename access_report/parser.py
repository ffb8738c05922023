"""Access Report - Line parser"""

import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from rich.progress import Progress, SpinnerColumn, TextColumn

from .errors import ParseError
from .models import LogRecord
from .patterns import (
    FIELD_DATE, FIELD_REFERER, FIELD_REMOTE_ADDRESS, FIELD_REMOTE_USER,
    FIELD_REQUEST, FIELD_SIZE, FIELD_STATUS, FIELD_TIME, FIELD_USER_AGENT,
    MIN_FIELDS, TIMESTAMP_FORMATS,
)

logger = logging.getLogger(__name__)

SourceLine = Tuple[str, int, str]

INTEGER = re.compile(r'-?[0-9]+')


def tokenize(line: str) -> List[str]:
    """Split a log line on single spaces.

    There is no quote or bracket handling: a space inside the request or
    the timestamp shifts every following field. Consecutive spaces produce
    empty tokens.
    """
    return line.rstrip('\r\n').split(' ')


def parse_timestamp(value: str) -> datetime:
    """Parse ``dd.mm.yyyy HH:MM[:SS][+zzzz]``, assuming UTC without an offset"""
    for fmt in TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    raise ParseError(f"Invalid timestamp {value!r}")


def _parse_int(value: str, name: str) -> int:
    if not INTEGER.fullmatch(value):
        raise ParseError(f"Invalid {name} {value!r}")
    return int(value)


def parse_line(line: str) -> LogRecord:
    """Parse a single log line, raising ParseError on malformed input"""
    parts = tokenize(line)
    if len(parts) < MIN_FIELDS:
        raise ParseError(
            f"Expected at least {MIN_FIELDS} fields, got {len(parts)}", line=line.rstrip('\r\n')
        )

    try:
        timestamp = parse_timestamp(f"{parts[FIELD_DATE]} {parts[FIELD_TIME]}")
        status_code = _parse_int(parts[FIELD_STATUS], 'status code')
        response_size = _parse_int(parts[FIELD_SIZE], 'response size')
    except ParseError as e:
        e.line = line.rstrip('\r\n')
        raise

    if response_size < 0:
        raise ParseError(f"Negative response size {response_size}", line=line.rstrip('\r\n'))

    return LogRecord(
        remote_address=parts[FIELD_REMOTE_ADDRESS],
        remote_user=parts[FIELD_REMOTE_USER],
        timestamp=timestamp,
        request=parts[FIELD_REQUEST],
        status_code=status_code,
        response_size=response_size,
        referer=parts[FIELD_REFERER] if len(parts) > FIELD_REFERER else '',
        user_agent=parts[FIELD_USER_AGENT] if len(parts) > FIELD_USER_AGENT else '',
    )


def try_parse_line(line: str) -> Union[LogRecord, ParseError]:
    """Parse a line, returning the error instead of raising it"""
    try:
        return parse_line(line)
    except ParseError as e:
        return e


class LineParser:
    """Turns ``(source, line_number, line)`` triples into records.

    Malformed lines are logged and counted in ``skipped`` unless ``strict``
    is set, in which case the first ParseError propagates.
    """

    def __init__(self, strict: bool = False, console=None):
        self.strict = strict
        self.console = console
        self.skipped = 0

    def parse_lines(self, lines: Iterable[SourceLine]) -> List[LogRecord]:
        self.skipped = 0

        if self.console is None:
            return list(self._iter_records(lines))

        records = []
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            task = progress.add_task("Parsing logs...", total=None)
            for record in self._iter_records(lines):
                records.append(record)
                progress.update(task, advance=1)
        return records

    def _iter_records(self, lines: Iterable[SourceLine]) -> Iterator[LogRecord]:
        for source, line_number, line in lines:
            record = self._process_line(source, line_number, line)
            if record is not None:
                yield record

    def _process_line(self, source: str, line_number: int, line: str) -> Optional[LogRecord]:
        if not line.strip():
            return None

        result = try_parse_line(line)
        if isinstance(result, LogRecord):
            return result

        result.locate(source, line_number)
        if self.strict:
            raise result

        self.skipped += 1
        logger.warning("Skipping malformed line %s", result)
        return None
