"""Access Report - Log sources (URL or file glob)"""

import glob
import logging
import os
from pathlib import Path
from typing import Iterator, List, Tuple
from urllib import error, request

from .errors import SourceReadError
from .patterns import HTTP_TIMEOUT, VERSION

logger = logging.getLogger(__name__)

SourceLine = Tuple[str, int, str]


def is_url(spec: str) -> bool:
    return spec.lower().startswith(('http://', 'https://'))


def read_url(url: str, timeout: float = HTTP_TIMEOUT) -> List[str]:
    """Fetch a URL and return its body split into lines"""
    req = request.Request(url, method='GET', headers={
        'User-Agent': f"access-report/{VERSION}"
    })
    try:
        with request.urlopen(req, timeout=timeout) as resp:
            body = resp.read()
            charset = resp.headers.get_content_charset() or 'utf-8'
    except error.HTTPError as e:
        raise SourceReadError(f"HTTP {e.code} {e.reason}", source=url) from e
    except (error.URLError, OSError, ValueError) as e:
        raise SourceReadError(f"Failed to fetch: {e}", source=url) from e

    logger.debug("Fetched %d bytes from %s", len(body), url)
    try:
        text = body.decode(charset, errors='replace')
    except LookupError as e:
        raise SourceReadError(f"Unsupported charset {charset!r}", source=url) from e
    return text.splitlines()


def match_files(pattern: str) -> List[Path]:
    """Regular files matching a glob, relative to the working directory or absolute"""
    matches = glob.glob(pattern, recursive=True)
    return sorted(Path(p) for p in matches if os.path.isfile(p))


def read_file(path: Path) -> List[str]:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read().splitlines()


class LogSource:
    """Iterates ``(source, line_number, line)`` over every line of a source.

    A file that cannot be read contributes no lines; the source as a whole
    fails only when nothing could be read at all. ``labels`` lists the URL
    or the files that were actually read.
    """

    def __init__(self, spec: str):
        self.spec = spec
        self.labels: List[str] = []

    def __iter__(self) -> Iterator[SourceLine]:
        self.labels = []
        if is_url(self.spec):
            lines = read_url(self.spec)
            self.labels.append(self.spec)
            for number, line in enumerate(lines, 1):
                yield self.spec, number, line
            return

        files = match_files(self.spec)
        if not files:
            raise SourceReadError("No files match pattern", source=self.spec)

        for path in files:
            label = str(path)
            try:
                lines = read_file(path)
            except (OSError, UnicodeError) as e:
                logger.warning("Failed to read %s: %s", label, e)
                continue
            self.labels.append(label)
            logger.debug("Read %d lines from %s", len(lines), label)
            for number, line in enumerate(lines, 1):
                yield label, number, line

        if not self.labels:
            raise SourceReadError("None of the matched files could be read", source=self.spec)

