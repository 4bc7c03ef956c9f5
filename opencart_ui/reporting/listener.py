"""
Test lifecycle listener feeding the execution report.

The host runner calls ``on_test_start`` and then exactly one of
``on_test_success``, ``on_test_failure`` or ``on_test_skipped`` per
attempt, from the thread that ran the test. Failures and skips get a
screenshot of that thread's browser when one is open.
"""

import threading
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional

from selenium.common.exceptions import WebDriverException

from ..core.exceptions import OpenCartUIError, error_kind_of
from ..core.logging_config import get_logger
from ..driver.manager import DriverManager
from .generator import ExecutionReport
from .models import ExecutionRecord, RunReport, TestStatus


logger = get_logger(__name__)


def class_name_of(qualified_name: str) -> Optional[str]:
    """
    Owner of a test: the component just before the method name.

    ``tests/test_login.py::TestLogin::test_title`` -> ``TestLogin``;
    ``tests/test_login.py::test_title`` -> ``test_login``;
    ``pkg.LoginPageTest.loginTest`` -> ``LoginPageTest``.
    """
    separator = "::" if "::" in qualified_name else "."
    parts = qualified_name.split(separator)
    if len(parts) < 2:
        return None
    owner = parts[-2]
    if owner.endswith(".py"):
        owner = Path(owner).stem
    return owner or None


class ReportListener:
    """
    Records test lifecycle events into an ``ExecutionReport``.

    Args:
        report: Append-only sink receiving finalized records
        driver_manager: Source of failure screenshots; optional
    """

    def __init__(self, report: ExecutionReport, driver_manager: Optional[DriverManager] = None):
        self.report = report
        self.driver_manager = driver_manager
        self._local = threading.local()
        self._lock = threading.Lock()

    def on_suite_start(self, suite_name: str) -> None:
        logger.info(f"Test Suite started: {suite_name}")
        self.report.suite_name = suite_name
        self.report.started_at = datetime.now()

    def on_suite_finish(self) -> RunReport:
        logger.info("Test Suite is ending")
        with self._lock:
            report = self.report.flush()
        self._local.record = None
        return report

    def on_test_start(
        self,
        name: str,
        qualified_name: str,
        suite_name: Optional[str] = None,
        description: Optional[str] = None,
        retry_count: int = 0,
    ) -> ExecutionRecord:
        logger.info(f"{name} started", extra={"test_name": qualified_name})

        categories = []
        suite = suite_name or self.report.suite_name
        if suite:
            categories.append(suite)
        owner = class_name_of(qualified_name)
        if owner:
            categories.append(owner)

        with self._lock:
            record = ExecutionRecord(
                name=name,
                qualified_name=qualified_name,
                description=description,
                categories=categories,
                retry_count=retry_count,
                thread_name=threading.current_thread().name,
            )
            self._local.record = record
        return record

    def current_record(self) -> Optional[ExecutionRecord]:
        return getattr(self._local, "record", None)

    def _require_record(self) -> ExecutionRecord:
        record = self.current_record()
        if record is None:
            raise RuntimeError("No test has been started on this thread")
        return record

    def on_test_success(self) -> ExecutionRecord:
        record = self._require_record()
        logger.info(f"{record.name} passed", extra={"test_name": record.qualified_name, "status": "passed"})
        record.status = TestStatus.PASSED
        record.log(TestStatus.PASSED, "Test passed")
        return self._finish(record)

    def on_test_failure(
        self, error: Optional[BaseException] = None, details: Optional[str] = None
    ) -> ExecutionRecord:
        record = self._require_record()
        logger.info(f"{record.name} failed", extra={"test_name": record.qualified_name, "status": "failed"})
        return self._close_with(record, TestStatus.FAILED, "Test failed", error, details)

    def on_test_skipped(
        self, error: Optional[BaseException] = None, details: Optional[str] = None
    ) -> ExecutionRecord:
        record = self._require_record()
        logger.info(f"{record.name} skipped", extra={"test_name": record.qualified_name, "status": "skipped"})
        return self._close_with(record, TestStatus.SKIPPED, "Test skipped", error, details)

    def _close_with(
        self,
        record: ExecutionRecord,
        status: TestStatus,
        message: str,
        error: Optional[BaseException],
        details: Optional[str],
    ) -> ExecutionRecord:
        record.status = status
        record.log(status, message)

        if error is not None:
            record.error_message = str(error)
            record.error_type = type(error).__name__
            kind = error_kind_of(error)
            record.error_kind = kind.value if kind else None
            record.stack_trace = details or "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        elif details:
            record.error_message = details.strip().splitlines()[-1] if details.strip() else None
            record.stack_trace = details

        screenshot = self._capture(record.name)
        if screenshot is not None:
            record.screenshots.append(str(screenshot))
            record.log(status, record.error_message or message, screenshot=str(screenshot))

        return self._finish(record)

    def _capture(self, label: str) -> Optional[Path]:
        if self.driver_manager is None or not self.driver_manager.has_session():
            logger.debug(f"No browser session, skipping screenshot for {label}")
            return None
        try:
            return self.driver_manager.capture_screenshot(label)
        except (OpenCartUIError, WebDriverException) as e:
            logger.warning(f"Could not capture screenshot for {label}: {e}")
            return None

    def _finish(self, record: ExecutionRecord) -> ExecutionRecord:
        record.ended_at = datetime.now()
        self.report.add_entry(record)
        return record
