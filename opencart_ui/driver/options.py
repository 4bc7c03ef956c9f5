"""
Browser options for local and grid sessions.

Translates the headless/incognito/remote flags of an ``EnvironmentConfig``
into Selenium options objects.
"""

from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.safari.options import Options as SafariOptions

from ..constants import GRID_SCREEN_RESOLUTION
from ..core.environment import EnvironmentConfig
from ..core.exceptions import UnsupportedBrowserError
from ..core.logging_config import get_logger


logger = get_logger(__name__)


class OptionsManager:
    """Creates per-browser options from an environment configuration."""

    def __init__(self, config: EnvironmentConfig):
        self.config = config

    def for_browser(self, browser: str):
        builders = {
            "chrome": self.get_chrome_options,
            "firefox": self.get_firefox_options,
            "edge": self.get_edge_options,
            "safari": self.get_safari_options,
        }
        builder = builders.get(browser)
        if builder is None:
            raise UnsupportedBrowserError(
                f"No options available for browser '{browser}'", browser=browser
            )
        return builder()

    def get_chrome_options(self) -> ChromeOptions:
        options = ChromeOptions()
        options.add_argument("--remote-allow-origins=*")
        if self.config.headless:
            logger.info("Running tests in headless")
            options.add_argument("--headless=new")
        if self.config.incognito:
            options.add_argument("--incognito")
        if self.config.remote:
            self._add_grid_capabilities(options, "chrome")
        return options

    def get_firefox_options(self) -> FirefoxOptions:
        options = FirefoxOptions()
        if self.config.headless:
            logger.info("Running tests in headless")
            options.add_argument("-headless")
        if self.config.incognito:
            options.add_argument("-private")
        if self.config.remote:
            self._add_grid_capabilities(options, "firefox")
        return options

    def get_edge_options(self) -> EdgeOptions:
        options = EdgeOptions()
        if self.config.headless:
            logger.info("Running tests in headless")
            options.add_argument("--headless=new")
        if self.config.incognito:
            options.add_argument("-inprivate")
        if self.config.remote:
            self._add_grid_capabilities(options, "MicrosoftEdge")
        return options

    def get_safari_options(self) -> SafariOptions:
        # safaridriver has no headless or private mode switches
        return SafariOptions()

    def _add_grid_capabilities(self, options, browser_name: str) -> None:
        options.set_capability("browserName", browser_name)
        if self.config.browser_version:
            options.browser_version = self.config.browser_version
        options.set_capability(
            "selenoid:options",
            {
                "screenResolution": GRID_SCREEN_RESOLUTION,
                "enableVNC": True,
                "name": self.config.test_name,
            },
        )
