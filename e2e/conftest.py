"""
Storefront suites.

Run with ``pytest e2e --env qa``; the browser and grid settings come from
``config/<env>.properties``.
"""

import pytest

from opencart_ui.pages import LoginPage
from opencart_ui.plugin import *  # noqa: F401,F403


@pytest.fixture(scope="class")
def credentials(environment):
    if not environment.username or not environment.password:
        pytest.skip(f"no login credentials configured for {environment.name}")
    return environment.username, environment.password


@pytest.fixture(scope="class")
def accounts_page(browser_session, credentials):
    return LoginPage(browser_session).login(*credentials)
