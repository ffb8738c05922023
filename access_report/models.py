"""Access Report - Data models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple

from .patterns import DEFAULT_FILE_LABEL, status_name


@dataclass(frozen=True)
class LogRecord:
    """Parsed access log line"""
    remote_address: str
    remote_user: str
    timestamp: datetime
    request: str
    status_code: int
    response_size: int
    referer: str = ''
    user_agent: str = ''


@dataclass(frozen=True)
class LogReport:
    """Aggregated statistics of a filtered record set.

    ``most_requested_resources`` and ``most_frequent_response_codes`` keep
    their top-N order. ``response_code_counts`` holds the count of every
    observed status code, not just the top-N ones.
    """
    from_date: Optional[datetime] = None
    to_date: Optional[datetime] = None
    total_requests: int = 0
    average_response_size: Optional[float] = None
    most_requested_resources: Dict[str, int] = field(default_factory=dict)
    most_frequent_response_codes: Dict[int, str] = field(default_factory=dict)
    response_code_counts: Dict[int, int] = field(default_factory=dict)
    sources: Tuple[str, ...] = (DEFAULT_FILE_LABEL,)
    skipped_lines: int = 0

    def response_code_count(self, status_code: int) -> int:
        """Count of a reported code, summed over every code sharing its name"""
        name = self.most_frequent_response_codes.get(status_code)
        if name is None:
            return 0
        return sum(
            count for code, count in self.response_code_counts.items()
            if status_name(code) == name
        )
