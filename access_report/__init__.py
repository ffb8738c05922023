"""Access Report package"""

from .patterns import VERSION, STATUS_NAMES, TOP_N
from .errors import AccessReportError, ArgumentError, ParseError, SourceReadError
from .models import LogRecord, LogReport
from .parser import LineParser, parse_line, try_parse_line
from .analyzer import aggregate, filter_records
from .output import print_report, render
from .sources import LogSource

__all__ = [
    'VERSION', 'LogRecord', 'LogReport', 'LineParser', 'LogSource',
    'parse_line', 'try_parse_line', 'filter_records', 'aggregate',
    'render', 'print_report',
    'AccessReportError', 'ArgumentError', 'ParseError', 'SourceReadError',
]
