"""
OpenCart UI - Selenium automation framework for the OpenCart storefront

Resolves per-environment browser settings, manages one WebDriver session per
test thread, models the storefront pages and records every test execution
into an HTML report.
"""

__version__ = "0.1.0"
__author__ = "OpenCart QA Team"

from .core.config import Config
from .core.environment import ConfigurationResolver, EnvironmentConfig
from .core.exceptions import OpenCartUIError
from .core.logging_config import setup_logging
from .driver.manager import BrowserSession, DriverManager

__all__ = [
    "Config",
    "ConfigurationResolver",
    "EnvironmentConfig",
    "OpenCartUIError",
    "setup_logging",
    "BrowserSession",
    "DriverManager",
]
