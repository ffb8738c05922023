"""Access Report - Error types"""

from typing import Optional


class AccessReportError(Exception):
    """Base class for every error raised by the package"""


class SourceReadError(AccessReportError):
    """A log source (URL, glob or file) could not be read"""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source

    def __str__(self):
        message = super().__str__()
        if self.source:
            return f"{self.source}: {message}"
        return message


class ParseError(AccessReportError):
    """A log line does not match the expected token schema"""

    def __init__(self, message: str, line: Optional[str] = None,
                 source: Optional[str] = None, line_number: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.source = source
        self.line_number = line_number

    def locate(self, source: Optional[str], line_number: Optional[int]) -> 'ParseError':
        """Attach the position of the offending line"""
        self.source = source
        self.line_number = line_number
        return self

    def __str__(self):
        message = super().__str__()
        location = self.source or ''
        if self.line_number is not None:
            location = f"{location}:{self.line_number}" if location else f"line {self.line_number}"
        if location:
            message = f"{location}: {message}"
        if self.line is not None:
            message = f"{message}: {self.line!r}"
        return message


class ArgumentError(AccessReportError):
    """Invalid command line argument (timestamp bound or output format)"""
