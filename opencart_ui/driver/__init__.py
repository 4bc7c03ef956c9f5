"""
Browser driver management.

Builds local or grid WebDriver sessions from an environment configuration
and keeps one live session per thread.
"""

from .manager import BrowserSession, DriverManager, SessionState, SUPPORTED_BROWSERS
from .options import OptionsManager

__all__ = [
    "BrowserSession",
    "DriverManager",
    "SessionState",
    "SUPPORTED_BROWSERS",
    "OptionsManager",
]
