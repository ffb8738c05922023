"""Access Report - Filtering and aggregation"""

import logging
from collections import Counter
from datetime import datetime
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .models import LogRecord, LogReport
from .patterns import DEFAULT_FILE_LABEL, TOP_N, status_name

logger = logging.getLogger(__name__)

K = TypeVar('K', bound=Hashable)


def filter_records(records: Iterable[LogRecord], from_date: Optional[datetime] = None,
                   to_date: Optional[datetime] = None) -> List[LogRecord]:
    """Keep records strictly between the optional bounds, preserving order"""
    return [
        record for record in records
        if (from_date is None or record.timestamp > from_date)
        and (to_date is None or record.timestamp < to_date)
    ]


def resource_from_request(request: str) -> str:
    """Second space-separated token of a request line, usually the path"""
    parts = request.split(' ')
    if len(parts) > 1:
        return parts[1]
    return ''


def top_n(counts: Dict[K, int], n: int = TOP_N) -> List[Tuple[K, int]]:
    """Highest counts first; equal counts are ordered by key ascending"""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:n]


def aggregate(records: Sequence[LogRecord], from_date: Optional[datetime] = None,
              to_date: Optional[datetime] = None,
              sources: Tuple[str, ...] = (DEFAULT_FILE_LABEL,),
              skipped_lines: int = 0) -> LogReport:
    """Build the report of an already filtered record set"""
    total = len(records)
    if not total:
        logger.info("No records to aggregate")
        return LogReport(
            from_date=from_date,
            to_date=to_date,
            total_requests=0,
            sources=sources,
            skipped_lines=skipped_lines,
        )

    resource_stats: Counter = Counter()
    status_stats: Counter = Counter()
    total_size = 0
    for record in records:
        total_size += record.response_size
        resource_stats[resource_from_request(record.request)] += 1
        status_stats[record.status_code] += 1

    logger.debug(
        "Aggregated %d records: %d resources, %d status codes",
        total, len(resource_stats), len(status_stats)
    )

    return LogReport(
        from_date=from_date,
        to_date=to_date,
        total_requests=total,
        average_response_size=total_size / total,
        most_requested_resources=dict(top_n(resource_stats)),
        most_frequent_response_codes={
            code: status_name(code) for code, _ in top_n(status_stats)
        },
        response_code_counts=dict(status_stats),
        sources=sources,
        skipped_lines=skipped_lines,
    )
