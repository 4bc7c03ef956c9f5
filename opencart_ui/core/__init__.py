"""Core components: configuration, environments, errors and logging."""

from .config import Config
from .environment import (
    ConfigurationResolver,
    EnvironmentConfig,
    DEFAULT_ENVIRONMENT,
    KNOWN_ENVIRONMENTS,
)
from .exceptions import (
    ErrorKind,
    OpenCartUIError,
    ConfigurationError,
    UnsupportedBrowserError,
    InvalidEndpointError,
    NoSessionError,
    ElementNotFoundError,
    DataSourceNotFoundError,
    FileOperationError,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "Config",
    "ConfigurationResolver",
    "EnvironmentConfig",
    "DEFAULT_ENVIRONMENT",
    "KNOWN_ENVIRONMENTS",
    "ErrorKind",
    "OpenCartUIError",
    "ConfigurationError",
    "UnsupportedBrowserError",
    "InvalidEndpointError",
    "NoSessionError",
    "ElementNotFoundError",
    "DataSourceNotFoundError",
    "FileOperationError",
    "setup_logging",
    "get_logger",
]
