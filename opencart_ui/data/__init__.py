"""Test data sources."""

from .provider import DataProvider, DataRow

__all__ = ["DataProvider", "DataRow"]
