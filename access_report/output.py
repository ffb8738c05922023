"""Access Report - Report output"""

from datetime import datetime
from typing import List, Optional, Sequence

from rich.console import Console
from tabulate import tabulate

from .errors import ArgumentError
from .models import LogReport
from .patterns import OUTPUT_FORMATS, REPORT_DATE_FORMAT


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime(REPORT_DATE_FORMAT) if value is not None else '-'


def _code(value: str) -> str:
    """Inline code span, fenced with more backticks than the value contains"""
    if not value:
        return '-'
    fence = '`'
    while fence in value:
        fence += '`'
    if value.startswith('`') or value.endswith('`'):
        value = f" {value} "
    return f"{fence}{value}{fence}"


def _general_rows(report: LogReport) -> List[List[str]]:
    rows = [
        ['File(s)', ', '.join(_code(source) for source in report.sources)],
        ['Start date', _format_date(report.from_date)],
        ['End date', _format_date(report.to_date)],
        ['Number of requests', str(report.total_requests)],
    ]
    if report.average_response_size is not None:
        rows.append(['Average response size', f"{report.average_response_size}b"])
    if report.skipped_lines:
        rows.append(['Skipped lines', str(report.skipped_lines)])
    return rows


def _resource_rows(report: LogReport) -> List[List[str]]:
    return [
        [_code(resource), str(count)]
        for resource, count in report.most_requested_resources.items()
    ]


def _response_code_rows(report: LogReport) -> List[List[str]]:
    return [
        [str(code), name, str(report.response_code_count(code))]
        for code, name in report.most_frequent_response_codes.items()
    ]


def _sections(report: LogReport):
    return [
        ('General info', ['Metric', 'Value'], ('center', 'right'), _general_rows(report)),
        ('Requested resources', ['Resource', 'Count'], ('center', 'right'),
         _resource_rows(report)),
        ('Response codes', ['Code', 'Name', 'Count'], ('center', 'center', 'right'),
         _response_code_rows(report)),
    ]


def _table(rows: Sequence[Sequence[str]], headers: Sequence[str],
           aligns: Sequence[str], tablefmt: str) -> str:
    rows = [[cell.replace('|', '\\|') for cell in row] for row in rows]
    return tabulate(
        rows,
        headers=headers,
        tablefmt=tablefmt,
        colalign=aligns if rows else None,
        disable_numparse=True,
    )


def render_markdown(report: LogReport) -> str:
    blocks = [
        f"#### {title}\n\n{_table(rows, headers, aligns, 'pipe')}"
        for title, headers, aligns, rows in _sections(report)
    ]
    return '\n\n'.join(blocks) + '\n'


def render_asciidoc(report: LogReport) -> str:
    blocks = [
        f"== {title}\n\n{_table(rows, headers, aligns, 'asciidoc')}"
        for title, headers, aligns, rows in _sections(report)
    ]
    return '\n\n'.join(blocks) + '\n'


RENDERERS = {
    'markdown': render_markdown,
    'adoc': render_asciidoc,
}


def resolve_format(fmt: str) -> str:
    """Map a user supplied format name onto a renderer key"""
    try:
        return OUTPUT_FORMATS[fmt.strip().lower()]
    except KeyError:
        choices = ', '.join(sorted(OUTPUT_FORMATS))
        raise ArgumentError(f"Unknown output format {fmt!r} (choose from {choices})") from None


def render(report: LogReport, fmt: str = 'markdown') -> str:
    return RENDERERS[resolve_format(fmt)](report)


def print_report(text: str, console: Optional[Console] = None):
    """Write rendered text to stdout without Rich markup processing"""
    if console is None:
        console = Console()
    console.out(text, highlight=False, end='')
