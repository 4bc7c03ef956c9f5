"""
pytest integration for the OpenCart UI suites.

A suite enables it from its ``conftest.py``::

    from opencart_ui.plugin import *  # noqa: F401,F403

Options:
    --env NAME          environment to load (default: $OPENCART_ENV, then qa)
    --config-dir PATH   directory of the ``*.properties`` files
    --report-path PATH  HTML report location (default reports/TestExecutionReport.html)
    --retries N         retry every failed test up to N times
    --json-report       also write the report as JSON next to the HTML file

Markers:
    @pytest.mark.datafile("register", argnames="row", excel=False)
    @pytest.mark.retry(max_attempts=3)
"""

import uuid
from pathlib import Path
from typing import Optional

import pytest
from _pytest.runner import runtestprotocol

from .core.config import Config
from .core.environment import ConfigurationResolver, EnvironmentConfig
from .core.logging_config import get_logger, setup_logging
from .data.provider import DataProvider
from .driver.manager import BrowserSession, DriverManager
from .pages.login import LoginPage
from .reporting.generator import ExecutionReport, default_system_info
from .reporting.listener import ReportListener
from .reporting.models import ExecutionRecord, ReportFormat, TestStatus
from .reporting.retry import MAX_ATTEMPTS, RetryPolicy


logger = get_logger(__name__)

__all__ = [
    "pytest_addoption",
    "pytest_configure",
    "pytest_sessionstart",
    "pytest_sessionfinish",
    "pytest_generate_tests",
    "pytest_runtest_protocol",
    "pytest_runtest_makereport",
    "pytest_report_teststatus",
    "opencart_run",
    "environment",
    "driver_manager",
    "data_provider",
    "browser_session",
    "login_page",
]


class OpenCartRun:
    """Per-process state shared by the hooks and fixtures."""

    def __init__(
        self,
        config: Config,
        report_path: Optional[Path] = None,
        retries: int = 0,
        json_report: bool = False,
    ):
        self.config = config
        self.run_id = uuid.uuid4().hex
        self.retries = retries
        self.resolver = ConfigurationResolver(config.config_dir)
        self.data_provider = DataProvider(config.testdata_dir)
        self.driver_manager = DriverManager(config.screenshots_dir)

        system_info = default_system_info()
        system_info["ENV NAME"] = config.environment or "qa"
        formats = [ReportFormat.HTML, ReportFormat.JSON] if json_report else [ReportFormat.HTML]
        self.report = ExecutionReport(
            report_path or config.report_path,
            system_info=system_info,
            formats=formats,
        )
        self.listener = ReportListener(self.report, self.driver_manager)
        self._environment: Optional[EnvironmentConfig] = None

    @property
    def environment(self) -> EnvironmentConfig:
        """The selected environment, resolved on first use."""
        if self._environment is None:
            env_config = self.resolver.resolve(self.config.environment)
            if self.config.headless_override is not None:
                env_config = env_config.with_headless(self.config.headless_override)
            self._environment = env_config
        return self._environment

    def retry_policy_for(self, item: pytest.Item) -> Optional[RetryPolicy]:
        marker = item.get_closest_marker("retry")
        if marker is not None:
            max_attempts = marker.kwargs.get(
                "max_attempts", marker.args[0] if marker.args else MAX_ATTEMPTS
            )
            return RetryPolicy(max_attempts)
        if self.retries > 0:
            return RetryPolicy(self.retries)
        return None


RUN_KEY = pytest.StashKey[OpenCartRun]()


def _run(config: pytest.Config) -> Optional[OpenCartRun]:
    return config.stash.get(RUN_KEY, None)


class _AttemptResult:
    """Stand-in for an attempt that produced no execution record."""

    def __init__(self, passed: bool):
        self.status = TestStatus.PASSED if passed else TestStatus.FAILED

    @property
    def is_success(self) -> bool:
        return self.status == TestStatus.PASSED


def pytest_addoption(parser):
    group = parser.getgroup("opencart-ui", "OpenCart UI options")
    group.addoption(
        "--env",
        action="store",
        dest="opencart_env",
        default=None,
        help="Environment to run against: qa, stage, dev, uat or prod",
    )
    group.addoption(
        "--config-dir",
        action="store",
        dest="opencart_config_dir",
        default=None,
        help="Directory holding the <env>.properties files",
    )
    group.addoption(
        "--report-path",
        action="store",
        dest="opencart_report_path",
        default=None,
        help="Path of the HTML execution report",
    )
    group.addoption(
        "--retries",
        action="store",
        type=int,
        dest="opencart_retries",
        default=0,
        help="Retry every failed test up to N times",
    )
    group.addoption(
        "--json-report",
        action="store_true",
        dest="opencart_json_report",
        default=False,
        help="Also write the execution report as JSON",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "datafile(name, argnames='row', excel=False): parametrize from a data source"
    )
    config.addinivalue_line(
        "markers", "retry(max_attempts=3): retry the test when it fails"
    )

    settings = Config.from_root(
        Path(config.rootpath),
        environment=config.getoption("opencart_env", default=None),
    )
    config_dir = config.getoption("opencart_config_dir", default=None)
    if config_dir:
        settings.config_dir = Path(config_dir)

    report_path = config.getoption("opencart_report_path", default=None)
    run = OpenCartRun(
        settings,
        report_path=Path(report_path) if report_path else None,
        retries=config.getoption("opencart_retries", default=0) or 0,
        json_report=config.getoption("opencart_json_report", default=False),
    )
    config.stash[RUN_KEY] = run
    setup_logging(settings, run.run_id, console=False)


def pytest_sessionstart(session):
    run = _run(session.config)
    if run is not None:
        run.listener.on_suite_start(session.config.rootpath.name)


def pytest_sessionfinish(session, exitstatus):
    run = _run(session.config)
    if run is None:
        return
    run.driver_manager.shutdown_all()
    run.listener.on_suite_finish()


def pytest_generate_tests(metafunc):
    marker = metafunc.definition.get_closest_marker("datafile")
    run = _run(metafunc.config)
    if marker is None or not marker.args or run is None:
        return

    source = marker.args[0]
    argnames = marker.kwargs.get("argnames", "row")
    names = [n.strip() for n in argnames.split(",")] if isinstance(argnames, str) else list(argnames)
    if not all(name in metafunc.fixturenames for name in names):
        return

    if marker.kwargs.get("excel"):
        rows = run.data_provider.excel_data(source)
    else:
        rows = run.data_provider.load(source)

    ids = [f"{source}-{index}" for index in range(len(rows))]
    if len(names) == 1:
        metafunc.parametrize(names[0], rows, ids=ids)
    else:
        metafunc.parametrize(names, rows, ids=ids)


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_protocol(item, nextitem):
    run = _run(item.config)
    if run is None:
        return None
    policy = run.retry_policy_for(item)
    if policy is None:
        return None

    item.ihook.pytest_runtest_logstart(nodeid=item.nodeid, location=item.location)

    while True:
        item._opencart_retry_count = policy.count
        item._opencart_record = None
        reports = runtestprotocol(item, nextitem=nextitem, log=False)
        failed = any(report.failed for report in reports)
        result = item._opencart_record or _AttemptResult(not failed)

        if not failed:
            if result.is_success:
                policy.retry(result)
            break

        if not policy.retry(result):
            logger.info(f"{item.nodeid} failed after {policy.count} retries")
            break

        logger.info(f"Retrying {item.nodeid} ({policy.count}/{policy.max_attempts})")
        for report in reports:
            if report.when in ("setup", "call") and report.failed:
                report.outcome = "rerun"
            item.ihook.pytest_runtest_logreport(report=report)

    for report in reports:
        item.ihook.pytest_runtest_logreport(report=report)
    item.ihook.pytest_runtest_logfinish(nodeid=item.nodeid, location=item.location)
    return True


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    run = _run(item.config)
    if run is not None and call.when == "setup":
        obj = getattr(item, "obj", None)
        item._opencart_record = run.listener.on_test_start(
            name=item.name,
            qualified_name=item.nodeid,
            description=(obj.__doc__ or "").strip() or None if obj is not None else None,
            retry_count=getattr(item, "_opencart_retry_count", 0),
        )

    outcome = yield
    report = outcome.get_result()

    if run is None:
        return
    _record_outcome(run.listener, item, call, report)


def _record_outcome(listener: ReportListener, item, call, report) -> None:
    record: Optional[ExecutionRecord] = getattr(item, "_opencart_record", None)
    if record is None or record.finalized or record.status != TestStatus.NOT_RUN:
        if report.failed and call.when == "teardown":
            logger.error(f"{item.nodeid} failed in teardown: {report.longreprtext}")
        return

    error = call.excinfo.value if call.excinfo is not None else None
    details = report.longreprtext or None

    if report.failed:
        listener.on_test_failure(error, details)
    elif report.skipped:
        listener.on_test_skipped(error, details)
    elif call.when == "call":
        listener.on_test_success()


def pytest_report_teststatus(report, config):
    if report.outcome == "rerun":
        return "rerun", "R", ("RERUN", {"yellow": True})
    return None


@pytest.fixture(scope="session")
def opencart_run(request) -> OpenCartRun:
    return request.config.stash[RUN_KEY]


@pytest.fixture(scope="session")
def environment(opencart_run) -> EnvironmentConfig:
    return opencart_run.environment


@pytest.fixture(scope="session")
def driver_manager(opencart_run) -> DriverManager:
    return opencart_run.driver_manager


@pytest.fixture(scope="session")
def data_provider(opencart_run) -> DataProvider:
    return opencart_run.data_provider


@pytest.fixture(scope="class")
def browser_session(driver_manager, environment) -> BrowserSession:
    """Browser opened on the environment's start page for one test class."""
    session = driver_manager.initialize(environment)
    yield session
    driver_manager.shutdown()


@pytest.fixture
def login_page(browser_session) -> LoginPage:
    return LoginPage(browser_session)
