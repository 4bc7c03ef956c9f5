"""
Shared element helpers for page objects.

All waits poll with ``WebDriverWait`` and give up after a bounded timeout;
an expired wait surfaces as ``ElementNotFoundError`` naming the locator and
the operation. Any other WebDriver error propagates unchanged.
"""

from typing import List, Optional, Tuple

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..constants import DEFAULT_TIME, POLL_FREQUENCY
from ..core.exceptions import ElementNotFoundError
from ..core.logging_config import get_logger
from ..driver.manager import BrowserSession


Locator = Tuple[str, str]


class BasePage:
    """Base class binding a page object to a browser session."""

    def __init__(self, session: BrowserSession):
        self.session = session
        self.driver = session.driver
        self.logger = get_logger(
            f"opencart_ui.pages.{self.__class__.__name__}",
            browser=session.browser,
        )

    def _wait(self, condition, timeout: float, locator: Optional[Locator], operation: str):
        try:
            return WebDriverWait(
                self.driver, timeout, poll_frequency=POLL_FREQUENCY
            ).until(condition)
        except TimeoutException as e:
            raise ElementNotFoundError(
                f"{operation} timed out after {timeout}s waiting for {locator}",
                locator=locator,
                operation=operation,
                timeout=timeout,
            ) from e

    def wait_for_visible(self, locator: Locator, timeout: float = DEFAULT_TIME) -> WebElement:
        return self._wait(
            EC.visibility_of_element_located(locator), timeout, locator, "wait_for_visible"
        )

    def wait_for_all_visible(
        self, locator: Locator, timeout: float = DEFAULT_TIME
    ) -> List[WebElement]:
        return self._wait(
            EC.visibility_of_all_elements_located(locator),
            timeout,
            locator,
            "wait_for_all_visible",
        )

    def wait_for_clickable(self, locator: Locator, timeout: float = DEFAULT_TIME) -> WebElement:
        return self._wait(
            EC.element_to_be_clickable(locator), timeout, locator, "wait_for_clickable"
        )

    def get_elements(self, locator: Locator, timeout: float = DEFAULT_TIME) -> List[WebElement]:
        """All elements matching ``locator`` once at least one is present."""
        return self._wait(
            EC.presence_of_all_elements_located(locator), timeout, locator, "get_elements"
        )

    def click(self, locator: Locator, timeout: float = DEFAULT_TIME) -> None:
        self.wait_for_clickable(locator, timeout).click()

    def type_text(self, locator: Locator, value: str, timeout: float = DEFAULT_TIME) -> None:
        element = self.wait_for_visible(locator, timeout)
        element.clear()
        element.send_keys(value)

    def get_text(self, locator: Locator, timeout: float = DEFAULT_TIME) -> str:
        return self.wait_for_visible(locator, timeout).text

    def is_displayed(self, locator: Locator) -> bool:
        """Presence check that never raises for a missing element."""
        elements = self.driver.find_elements(*locator)
        return bool(elements) and elements[0].is_displayed()

    def wait_for_title(self, title: str, timeout: float = DEFAULT_TIME) -> str:
        self._wait(EC.title_is(title), timeout, None, f"wait_for_title({title!r})")
        return self.driver.title

    def wait_for_url_contains(self, fraction: str, timeout: float = DEFAULT_TIME) -> str:
        self._wait(
            EC.url_contains(fraction), timeout, None, f"wait_for_url_contains({fraction!r})"
        )
        return self.driver.current_url
