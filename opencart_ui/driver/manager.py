"""
Browser session lifecycle.

``DriverManager`` owns at most one live ``BrowserSession`` per thread. The
session object is handed explicitly to every page object, so ownership is
visible at each call site; the per-thread registry only backs
``get_session()`` for code that has no handle (the report listener taking a
screenshot, suite teardown).
"""

import itertools
import re
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional
from urllib.parse import urlparse

from selenium import webdriver

from ..core.environment import EnvironmentConfig
from ..core.exceptions import (
    FileOperationError,
    InvalidEndpointError,
    NoSessionError,
    UnsupportedBrowserError,
)
from ..core.logging_config import get_logger, log_performance
from .options import OptionsManager


SUPPORTED_BROWSERS = ("chrome", "firefox", "edge", "safari")
REMOTE_BROWSERS = ("chrome", "firefox", "edge")

logger = get_logger(__name__)


class SessionState(Enum):
    """Lifecycle of a browser session."""

    UNINITIALIZED = "uninitialized"
    LOCAL = "local"
    REMOTE = "remote"
    READY = "ready"
    CLOSED = "closed"


LOCAL_DRIVERS: Dict[str, Callable] = {
    "chrome": lambda options: webdriver.Chrome(options=options),
    "firefox": lambda options: webdriver.Firefox(options=options),
    "edge": lambda options: webdriver.Edge(options=options),
    "safari": lambda options: webdriver.Safari(options=options),
}


def remote_driver(hub_url: str, options):
    return webdriver.Remote(command_executor=hub_url, options=options)


@dataclass
class BrowserSession:
    """A live browser bound to one thread."""

    config: EnvironmentConfig
    thread_id: int
    driver: Optional[object] = None
    state: SessionState = SessionState.UNINITIALIZED
    remote: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_ready(self) -> bool:
        return self.state == SessionState.READY

    @property
    def browser(self) -> str:
        return self.config.browser


def _safe_label(label: str) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9_.-]+", "_", label or "").strip("_.")
    return cleaned or "screenshot"


class DriverManager:
    """
    Creates, hands out and tears down per-thread browser sessions.

    Args:
        screenshots_dir: Where ``capture_screenshot`` writes images
        local_drivers: Browser name -> callable(options) building a local driver
        remote_factory: Callable(hub_url, options) building a grid driver
        options_manager: Class building options from an EnvironmentConfig
    """

    def __init__(
        self,
        screenshots_dir: Path,
        local_drivers: Optional[Dict[str, Callable]] = None,
        remote_factory: Optional[Callable] = None,
        options_manager: Callable = OptionsManager,
    ):
        self.screenshots_dir = Path(screenshots_dir)
        self._local_drivers = dict(LOCAL_DRIVERS)
        if local_drivers:
            self._local_drivers.update(local_drivers)
        self._remote_factory = remote_factory or remote_driver
        self._options_manager = options_manager

        self._sessions: Dict[int, BrowserSession] = {}
        self._lock = threading.Lock()
        self._shot_counter = itertools.count(1)

    @log_performance("browser initialization")
    def initialize(self, config: EnvironmentConfig) -> BrowserSession:
        """
        Start a browser for the calling thread and open the base URL.

        Raises:
            UnsupportedBrowserError: browser is not chrome/firefox/edge/safari
            InvalidEndpointError: remote run with a malformed hub URL
        """
        if self.has_session():
            logger.warning("Thread already owns a browser session, closing it first")
            self.shutdown()

        browser = (config.browser or "").strip().lower()
        logger.info(f"browser name is : {browser}")

        if browser not in SUPPORTED_BROWSERS:
            logger.error(f"plz pass the right browser name: {config.browser}")
            raise UnsupportedBrowserError(
                f"Browser not supported: '{config.browser}'. "
                f"Must be one of {list(SUPPORTED_BROWSERS)}",
                browser=config.browser,
            )

        remote = config.remote
        if remote and browser not in REMOTE_BROWSERS:
            logger.warning(f"{browser} cannot run on the grid, running it locally")
            remote = False

        hub_url = self._validate_hub_url(config.hub_url) if remote else None

        session = BrowserSession(config=config, thread_id=threading.get_ident())
        options = self._options_manager(config).for_browser(browser)

        if remote:
            logger.info(f"Running it on GRID with browser: {browser}")
            session.state = SessionState.REMOTE
            session.remote = True
            session.driver = self._remote_factory(hub_url, options)
        else:
            logger.info("Running tests on Local")
            session.state = SessionState.LOCAL
            session.driver = self._local_drivers[browser](options)

        try:
            session.driver.delete_all_cookies()
            session.driver.maximize_window()
            logger.info(f"app url : {config.base_url}")
            session.driver.get(config.base_url)
        except Exception:
            logger.error("Browser setup failed, quitting the half-open session")
            self._quit(session)
            raise

        session.state = SessionState.READY
        with self._lock:
            self._sessions[session.thread_id] = session

        return session

    def _validate_hub_url(self, hub_url: Optional[str]) -> str:
        parsed = urlparse(hub_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            logger.error(f"Malformed grid hub URL: {hub_url!r}")
            raise InvalidEndpointError(
                f"Malformed grid hub URL: {hub_url!r}", hub_url=hub_url
            )
        return hub_url

    def get_session(self) -> BrowserSession:
        """Return the calling thread's session or raise NoSessionError."""
        thread_id = threading.get_ident()
        with self._lock:
            session = self._sessions.get(thread_id)
        if session is None:
            raise NoSessionError(
                "No browser session for the current thread; call initialize() first",
                thread_id=thread_id,
            )
        return session

    def has_session(self) -> bool:
        with self._lock:
            return threading.get_ident() in self._sessions

    def capture_screenshot(self, label: str) -> Path:
        """
        Save a PNG of the current thread's browser.

        The file name combines ``label`` with a nanosecond timestamp and a
        counter so concurrent captures never collide.

        Returns:
            Absolute path of the written image
        """
        session = self.get_session()
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)

        token = f"{time.time_ns()}_{next(self._shot_counter)}"
        path = (self.screenshots_dir / f"{_safe_label(label)}_{token}.png").resolve()

        if not session.driver.save_screenshot(str(path)):
            raise FileOperationError(
                f"Failed to write screenshot: {path}",
                file_path=str(path),
                operation="screenshot",
            )

        logger.debug(f"Screenshot saved: {path}")
        return path

    def shutdown(self) -> None:
        """Close the calling thread's session. Safe to call repeatedly."""
        with self._lock:
            session = self._sessions.pop(threading.get_ident(), None)
        if session is not None:
            self._quit(session)

    def shutdown_all(self) -> None:
        """Close every thread's session, used at suite end."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            self._quit(session)

    def _quit(self, session: BrowserSession) -> None:
        if session.state == SessionState.CLOSED:
            return
        try:
            if session.driver is not None:
                session.driver.quit()
        except Exception as e:
            logger.warning(f"Error while quitting browser: {e}")
        finally:
            session.state = SessionState.CLOSED
            logger.info(f"Browser session closed ({session.browser})")
