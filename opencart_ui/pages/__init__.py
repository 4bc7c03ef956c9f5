"""
Page objects for the storefront.

Each navigation method returns the object of the page it lands on:
LoginPage -> AccountsPage -> SearchResultsPage -> ProductInfoPage, and
LoginPage -> RegisterPage.
"""

from .base import BasePage
from .login import LoginPage
from .accounts import AccountsPage
from .register import RegisterPage
from .search_results import SearchResultsPage
from .product_info import ProductInfoPage

__all__ = [
    "BasePage",
    "LoginPage",
    "AccountsPage",
    "RegisterPage",
    "SearchResultsPage",
    "ProductInfoPage",
]
