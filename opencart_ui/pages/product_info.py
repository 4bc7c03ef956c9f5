"""Product detail page."""

from typing import Dict

from selenium.webdriver.common.by import By

from ..constants import DEFAULT_MEDIUM_TIME
from .base import BasePage


class ProductInfoPage(BasePage):
    """
    Product header, image thumbnails and the two ``label: value`` lists.

    The first list carries metadata (Brand, Product Code, Reward Points,
    Availability); the second carries the gross price followed by an
    ``Ex Tax: <amount>`` line.
    """

    PRODUCT_HEADER = (By.CSS_SELECTOR, "div#content h1")
    PRODUCT_IMAGES = (By.CSS_SELECTOR, "div#content a.thumbnail")
    PRODUCT_META_DATA = (By.XPATH, "(//div[@id='content']//ul[@class='list-unstyled'])[1]/li")
    PRODUCT_PRICE_DATA = (By.XPATH, "(//div[@id='content']//ul[@class='list-unstyled'])[2]/li")

    def header(self) -> str:
        header = self.get_text(self.PRODUCT_HEADER)
        self.logger.info(f"product header : {header}")
        return header

    def images_count(self) -> int:
        count = len(self.wait_for_all_visible(self.PRODUCT_IMAGES, DEFAULT_MEDIUM_TIME))
        self.logger.info(f"total images : {count}")
        return count

    def get_info(self) -> Dict[str, str]:
        """Collect header, image count, metadata and price data into one map."""
        info = {
            "productname": self.header(),
            "productimagescount": str(self.images_count()),
        }
        info.update(self._meta_data())
        info.update(self._price_data())
        return info

    def _meta_data(self) -> Dict[str, str]:
        meta = {}
        for element in self.get_elements(self.PRODUCT_META_DATA):
            key, sep, value = element.text.partition(":")
            if not sep:
                self.logger.debug(f"Skipping meta line without label: {element.text!r}")
                continue
            meta[key.strip()] = value.strip()
        return meta

    def _price_data(self) -> Dict[str, str]:
        lines = [element.text for element in self.get_elements(self.PRODUCT_PRICE_DATA)]
        price = {"productprice": lines[0].strip()}
        if len(lines) > 1:
            price["exTaxPrice"] = lines[1].split(":", 1)[-1].strip()
        return price
