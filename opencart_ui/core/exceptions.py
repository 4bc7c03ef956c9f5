"""
Error types for the OpenCart UI framework.

Every framework error carries an ``ErrorKind``. Reporting and retry code
classify failures by that kind rather than by walking the class hierarchy;
the subclasses exist so callers can still ``except`` a specific failure.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(Enum):
    """Classification of framework failures."""

    CONFIGURATION = "configuration"
    UNSUPPORTED_BROWSER = "unsupported_browser"
    INVALID_ENDPOINT = "invalid_endpoint"
    NO_SESSION = "no_session"
    ELEMENT_NOT_FOUND = "element_not_found"
    DATA_SOURCE_NOT_FOUND = "data_source_not_found"
    FILE_OPERATION = "file_operation"


class OpenCartUIError(Exception):
    """Base exception class for all framework errors."""

    kind: ErrorKind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.context = context or {}

    @property
    def error_code(self) -> str:
        return self.kind.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind.value,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(OpenCartUIError):
    """Raised for an unknown environment, a missing properties file or bad keys."""

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str,
        environment: Optional[str] = None,
        violations: Optional[list] = None,
    ):
        super().__init__(message)
        self.environment = environment
        self.violations = violations or []
        self.context.update(
            {
                "environment": environment,
                "violations": self.violations,
            }
        )


class UnsupportedBrowserError(OpenCartUIError):
    """Raised when the configured browser is not one the framework can drive."""

    kind = ErrorKind.UNSUPPORTED_BROWSER

    def __init__(self, message: str, browser: Optional[str] = None):
        super().__init__(message)
        self.browser = browser
        self.context.update({"browser": browser})


class InvalidEndpointError(OpenCartUIError):
    """Raised when the remote grid hub URL is malformed."""

    kind = ErrorKind.INVALID_ENDPOINT

    def __init__(self, message: str, hub_url: Optional[str] = None):
        super().__init__(message)
        self.hub_url = hub_url
        self.context.update({"hub_url": hub_url})


class NoSessionError(OpenCartUIError):
    """Raised when a browser session is requested before initialization."""

    kind = ErrorKind.NO_SESSION

    def __init__(self, message: str, thread_id: Optional[int] = None):
        super().__init__(message)
        self.thread_id = thread_id
        self.context.update({"thread_id": thread_id})


class ElementNotFoundError(OpenCartUIError):
    """Raised when a bounded wait for an element expires."""

    kind = ErrorKind.ELEMENT_NOT_FOUND

    def __init__(
        self,
        message: str,
        locator: Optional[tuple] = None,
        operation: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(message)
        self.locator = locator
        self.operation = operation
        self.timeout = timeout
        self.context.update(
            {
                "locator": list(locator) if locator else None,
                "operation": operation,
                "timeout": timeout,
            }
        )


class DataSourceNotFoundError(OpenCartUIError):
    """Raised when a CSV or spreadsheet data source does not exist."""

    kind = ErrorKind.DATA_SOURCE_NOT_FOUND

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        file_path: Optional[str] = None,
    ):
        super().__init__(message)
        self.source = source
        self.file_path = file_path
        self.context.update({"source": source, "file_path": file_path})


class FileOperationError(OpenCartUIError):
    """Raised when writing a report or screenshot fails."""

    kind = ErrorKind.FILE_OPERATION

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.context.update({"file_path": file_path, "operation": operation})


def error_kind_of(error: BaseException) -> Optional[ErrorKind]:
    """Return the framework kind of ``error``, or None for foreign errors."""
    if isinstance(error, OpenCartUIError):
        return error.kind
    return None
