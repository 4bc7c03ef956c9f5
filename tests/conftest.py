"""
Pytest configuration and shared fixtures for OpenCart UI tests.

Provides a throwaway project layout, environment configurations and an
in-memory WebDriver stand-in so page objects and the driver manager can be
exercised without a browser.
"""

import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from selenium.common.exceptions import NoSuchElementException

from opencart_ui.core.config import Config
from opencart_ui.core.environment import EnvironmentConfig
from opencart_ui.driver.manager import BrowserSession, DriverManager, SessionState


PROPERTIES_TEMPLATE = """# {name} environment
browser={browser}
url=https://shop.example.com/index.php?route=account/login
remote={remote}
huburl={huburl}
headless=true
incognito=false
browserversion=
testname=Open Cart {name} tests
username=user@example.com
password=secret
"""


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's shell settings out of every test."""
    for name in ("CI", "OPENCART_ENV", "OPENCART_HEADLESS", "OPENCART_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _write_properties(config_dir: Path, file_name: str, name: str, **overrides) -> Path:
    values = {"browser": "chrome", "remote": "false", "huburl": "", "name": name}
    values.update(overrides)
    path = config_dir / file_name
    path.write_text(PROPERTIES_TEMPLATE.format(**values), encoding="utf-8")
    return path


@pytest.fixture
def write_properties():
    """Writer for a properties file: (config_dir, file_name, env_name, **keys)."""
    return _write_properties


@pytest.fixture
def project_dir(tmp_path):
    """Project root with config/ holding every environment and testdata/."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    for name in ("qa", "stage", "dev", "uat"):
        _write_properties(config_dir, f"{name}.properties", name)
    _write_properties(config_dir, "config.properties", "prod", browser="firefox")

    testdata_dir = tmp_path / "testdata"
    testdata_dir.mkdir()
    (testdata_dir / "register.csv").write_text(
        "Arun,Kumar,9876543210,arun@123,yes\n"
        "Priya,Sharma,9876543211,priya@123,no\n"
        "Rahul,Verma,9876543212,rahul@123,yes\n"
        "Sneha,Patel,9876543213,sneha@123,no\n"
        "Vikram,Singh,9876543214,vikram@123,yes\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def temp_config(project_dir):
    """Framework configuration rooted at the temporary project."""
    return Config.from_root(project_dir)


@pytest.fixture
def env_config():
    """Local chrome environment."""
    return EnvironmentConfig.model_validate(
        {
            "name": "qa",
            "browser": "chrome",
            "url": "https://shop.example.com/index.php?route=account/login",
            "headless": "true",
            "testname": "Open Cart qa tests",
        }
    )


@pytest.fixture
def remote_env_config(env_config):
    return env_config.model_copy(
        update={"remote": True, "hub_url": "http://grid.example.com:4444/wd/hub"}
    )


class FakeElement:
    """Element double recording the interactions made on it."""

    def __init__(self, text="", displayed=True, enabled=True, driver=None, name=None):
        self.text = text
        self.displayed = displayed
        self.enabled = enabled
        self.driver = driver
        self.name = name
        self.typed = []
        self.clicks = 0

    def is_displayed(self):
        return self.displayed

    def is_enabled(self):
        return self.enabled

    def clear(self):
        self.typed = []

    def send_keys(self, value):
        self.typed.append(value)

    def click(self):
        self.clicks += 1
        if self.driver is not None:
            self.driver.clicked.append(self.name)


class FakeDriver:
    """
    Minimal WebDriver stand-in keyed by locator tuples.

    ``add`` registers one or more elements under a locator; anything not
    registered is missing from the page.
    """

    def __init__(self, title="", current_url=""):
        self.title = title
        self.current_url = current_url
        self.elements = {}
        self.clicked = []
        self.visited = []
        self.quit = MagicMock()
        self.save_screenshot = MagicMock(return_value=True)

    def add(self, locator, *texts, displayed=True):
        elements = [
            FakeElement(text, displayed=displayed, driver=self, name=locator[1])
            for text in (texts or ("",))
        ]
        self.elements[tuple(locator)] = elements
        return elements[0] if len(elements) == 1 else elements

    def find_element(self, by, value):
        elements = self.elements.get((by, value))
        if not elements:
            raise NoSuchElementException(f"{by}={value}")
        return elements[0]

    def find_elements(self, by, value):
        return list(self.elements.get((by, value), []))

    def get(self, url):
        self.visited.append(url)
        self.current_url = url

    def delete_all_cookies(self):
        pass

    def maximize_window(self):
        pass


@pytest.fixture
def fake_driver():
    return FakeDriver()


@pytest.fixture
def browser_session(env_config, fake_driver):
    """Ready session wrapping the fake driver."""
    return BrowserSession(
        config=env_config,
        thread_id=threading.get_ident(),
        driver=fake_driver,
        state=SessionState.READY,
    )


@pytest.fixture
def mock_webdriver():
    driver = MagicMock()
    driver.save_screenshot.return_value = True
    return driver


@pytest.fixture
def driver_manager(tmp_path, mock_webdriver):
    """DriverManager whose local and remote factories return ``mock_webdriver``."""
    local_factory = MagicMock(return_value=mock_webdriver)
    remote_factory = MagicMock(return_value=mock_webdriver)
    manager = DriverManager(
        tmp_path / "screenshots",
        local_drivers={
            "chrome": local_factory,
            "firefox": local_factory,
            "edge": local_factory,
            "safari": local_factory,
        },
        remote_factory=remote_factory,
    )
    manager.local_factory = local_factory
    manager.remote_factory = remote_factory
    yield manager
    manager.shutdown_all()
