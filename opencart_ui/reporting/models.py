"""
Pydantic models for execution records and the run report.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReportFormat(Enum):
    """Report output formats."""

    HTML = "html"
    JSON = "json"


class TestStatus(Enum):
    """Status of one test execution."""

    __test__ = False

    NOT_RUN = "not-run"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class LogEvent(BaseModel):
    """One line of an entry's log, e.g. "Test failed" plus its attachment."""

    model_config = ConfigDict(extra="forbid")

    timestamp: datetime = Field(default_factory=datetime.now)
    status: TestStatus
    message: str
    screenshot: Optional[str] = Field(None, description="Attached screenshot path")


class ExecutionRecord(BaseModel):
    """One attempt of one test method, from start to its final status."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: str = Field(..., description="Test method name")
    qualified_name: str = Field(..., description="Fully qualified test id")
    description: Optional[str] = Field(None, description="Test docstring")
    categories: List[str] = Field(default_factory=list, description="Suite and class tags")
    status: TestStatus = Field(TestStatus.NOT_RUN)
    started_at: datetime = Field(default_factory=datetime.now)
    ended_at: Optional[datetime] = Field(None)
    retry_count: int = Field(0, ge=0, description="Retries before this attempt")
    thread_name: Optional[str] = Field(None)

    error_message: Optional[str] = Field(None)
    error_type: Optional[str] = Field(None)
    error_kind: Optional[str] = Field(None, description="Framework error kind, if any")
    stack_trace: Optional[str] = Field(None)

    screenshots: List[str] = Field(default_factory=list)
    events: List[LogEvent] = Field(default_factory=list)
    finalized: bool = Field(False)

    @field_validator("name", "qualified_name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Test name cannot be empty")
        return v.strip()

    @property
    def is_success(self) -> bool:
        return self.status == TestStatus.PASSED

    @property
    def duration(self) -> float:
        if self.ended_at is None:
            return 0.0
        return max((self.ended_at - self.started_at).total_seconds(), 0.0)

    def log(self, status: TestStatus, message: str, screenshot: Optional[str] = None) -> None:
        self.events.append(LogEvent(status=status, message=message, screenshot=screenshot))


class TestResultSummary(BaseModel):
    """Summary of a run's entries."""

    __test__ = False

    model_config = ConfigDict(extra="forbid")

    total_tests: int = Field(..., ge=0)
    passed: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    not_run: int = Field(0, ge=0)
    duration: float = Field(..., ge=0)

    @property
    def success_rate(self) -> float:
        if self.total_tests == 0:
            return 0.0
        return self.passed / self.total_tests * 100

    @classmethod
    def from_records(cls, records: List[ExecutionRecord]) -> "TestResultSummary":
        return cls(
            total_tests=len(records),
            passed=sum(1 for r in records if r.status == TestStatus.PASSED),
            failed=sum(1 for r in records if r.status == TestStatus.FAILED),
            skipped=sum(1 for r in records if r.status == TestStatus.SKIPPED),
            not_run=sum(1 for r in records if r.status == TestStatus.NOT_RUN),
            duration=sum(r.duration for r in records),
        )


class RunReport(BaseModel):
    """Everything written to the report artifact."""

    model_config = ConfigDict(extra="forbid")

    report_name: str
    suite_name: Optional[str] = None
    started_at: datetime
    completed_at: datetime
    system_info: Dict[str, Any] = Field(default_factory=dict)
    summary: TestResultSummary
    entries: List[ExecutionRecord] = Field(default_factory=list)
