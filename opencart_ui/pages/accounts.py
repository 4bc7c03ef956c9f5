"""Accounts page shown after a successful login."""

from typing import List, Optional

from selenium.webdriver.common.by import By

from ..constants import ACC_PAGE_FRACTION_URL, ACCOUNTS_PAGE_TITLE, DEFAULT_MEDIUM_TIME, DEFAULT_TIME
from .base import BasePage
from .search_results import SearchResultsPage


class AccountsPage(BasePage):
    """Account overview with section headers and the header search box."""

    LOGOUT_LINK = (By.LINK_TEXT, "Logout")
    HEADERS = (By.CSS_SELECTOR, "div#content h2")
    SEARCH = (By.NAME, "search")
    SEARCH_ICON = (By.CSS_SELECTOR, "div#search button")

    def title(self) -> str:
        title = self.wait_for_title(ACCOUNTS_PAGE_TITLE, DEFAULT_TIME)
        self.logger.info(f"Acc page title : {title}")
        return title

    def url(self) -> str:
        url = self.wait_for_url_contains(ACC_PAGE_FRACTION_URL, DEFAULT_TIME)
        self.logger.info(f"Acc page url : {url}")
        return url

    def is_logout_link_exist(self) -> bool:
        return self.is_displayed(self.LOGOUT_LINK)

    def headers(self) -> List[str]:
        elements = self.wait_for_all_visible(self.HEADERS, DEFAULT_MEDIUM_TIME)
        return [element.text for element in elements]

    def is_search_exist(self) -> bool:
        return self.is_displayed(self.SEARCH)

    def search(self, term: str) -> Optional[SearchResultsPage]:
        """
        Search the catalogue for ``term``.

        Returns:
            The results page, or None when this page has no search field
        """
        self.logger.info(f"Searching for product: {term}")
        if not self.is_search_exist():
            self.logger.warning("Search field is not present on the page")
            return None

        self.type_text(self.SEARCH, term)
        self.click(self.SEARCH_ICON)
        return SearchResultsPage(self.session)
