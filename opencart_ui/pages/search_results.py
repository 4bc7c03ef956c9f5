"""Search results listing."""

from selenium.webdriver.common.by import By

from ..constants import DEFAULT_MEDIUM_TIME, DEFAULT_TIME
from .base import BasePage
from .product_info import ProductInfoPage


class SearchResultsPage(BasePage):

    SEARCH_RESULT = (By.CSS_SELECTOR, "div.product-thumb")

    def results_count(self) -> int:
        results = self.wait_for_all_visible(self.SEARCH_RESULT, DEFAULT_MEDIUM_TIME)
        self.logger.info(f"Product search results count : {len(results)}")
        return len(results)

    def select_product(self, name: str) -> ProductInfoPage:
        # exact visible text; a missing product fails the wait
        self.click((By.LINK_TEXT, name), DEFAULT_TIME)
        return ProductInfoPage(self.session)
