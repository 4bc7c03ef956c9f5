"""
Execution reporting: records, the HTML report, the lifecycle listener and
the retry policy.
"""

from .generator import ExecutionReport
from .listener import ReportListener, class_name_of
from .models import (
    ExecutionRecord,
    LogEvent,
    ReportFormat,
    RunReport,
    TestResultSummary,
    TestStatus,
)
from .retry import RetryPolicy, MAX_ATTEMPTS

__all__ = [
    "ExecutionReport",
    "ReportListener",
    "class_name_of",
    "ExecutionRecord",
    "LogEvent",
    "ReportFormat",
    "RunReport",
    "TestResultSummary",
    "TestStatus",
    "RetryPolicy",
    "MAX_ATTEMPTS",
]
