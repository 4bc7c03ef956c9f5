"""Login page of the storefront."""

from selenium.webdriver.common.by import By

from ..constants import DEFAULT_MEDIUM_TIME, DEFAULT_TIME, LOGIN_PAGE_FRACTION_URL, LOGIN_PAGE_TITLE
from .accounts import AccountsPage
from .base import BasePage
from .register import RegisterPage


class LoginPage(BasePage):
    """Entry page: credentials form plus links to registration."""

    EMAIL = (By.ID, "input-email")
    PASSWORD = (By.ID, "input-password")
    LOGIN_BUTTON = (By.XPATH, "//input[@value='Login']")
    FORGOT_PWD_LINK = (By.LINK_TEXT, "Forgotten Password")
    REGISTER_LINK = (By.LINK_TEXT, "Register")

    def title(self) -> str:
        title = self.wait_for_title(LOGIN_PAGE_TITLE, DEFAULT_TIME)
        self.logger.info(f"login page title : {title}")
        return title

    def url(self) -> str:
        url = self.wait_for_url_contains(LOGIN_PAGE_FRACTION_URL, DEFAULT_TIME)
        self.logger.info(f"login page url : {url}")
        return url

    def is_forgot_password_link_exist(self) -> bool:
        return self.is_displayed(self.FORGOT_PWD_LINK)

    def login(self, username: str, password: str) -> AccountsPage:
        """Submit the credentials form and land on the accounts page."""
        self.logger.info(f"login to application with username: {username}")
        self.type_text(self.EMAIL, username, DEFAULT_MEDIUM_TIME)
        self.type_text(self.PASSWORD, password)
        self.click(self.LOGIN_BUTTON)
        return AccountsPage(self.session)

    def go_to_register(self) -> RegisterPage:
        self.click(self.REGISTER_LINK, DEFAULT_TIME)
        return RegisterPage(self.session)
