"""Retry policy for failed test executions."""

from .models import TestStatus


MAX_ATTEMPTS = 3


class RetryPolicy:
    """
    Decides whether a failed execution runs again.

    One instance belongs to one test item; its counter never carries over
    to another test. A failed result is retried while fewer than
    ``max_attempts`` retries have been granted. Every failed result is
    marked FAILED, the last one included; a passing result is marked
    PASSED and never retried.
    """

    def __init__(self, max_attempts: int = MAX_ATTEMPTS):
        if max_attempts < 0:
            raise ValueError("max_attempts cannot be negative")
        self.max_attempts = max_attempts
        self.count = 0

    @property
    def exhausted(self) -> bool:
        return self.count >= self.max_attempts

    def retry(self, result) -> bool:
        """
        Args:
            result: Object exposing ``is_success`` and a writable ``status``

        Returns:
            True when the execution should run again
        """
        if result.is_success:
            result.status = TestStatus.PASSED
            return False

        result.status = TestStatus.FAILED
        if self.count < self.max_attempts:
            self.count += 1
            return True
        return False
