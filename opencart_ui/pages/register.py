"""Account registration form."""

from selenium.webdriver.common.by import By

from ..constants import DEFAULT_MEDIUM_TIME, USER_REGISTER_SUCCESS_MESSG
from .base import BasePage


class RegisterPage(BasePage):

    FIRST_NAME = (By.ID, "input-firstname")
    LAST_NAME = (By.ID, "input-lastname")
    EMAIL = (By.ID, "input-email")
    TELEPHONE = (By.ID, "input-telephone")
    PASSWORD = (By.ID, "input-password")
    CONFIRM_PASSWORD = (By.ID, "input-confirm")
    SUBSCRIBE_YES = (
        By.XPATH,
        "(//label[@class='radio-inline'])[position()=1]/input[@type='radio']",
    )
    SUBSCRIBE_NO = (
        By.XPATH,
        "(//label[@class='radio-inline'])[position()=2]/input[@type='radio']",
    )
    AGREE_CHECKBOX = (By.NAME, "agree")
    CONTINUE_BUTTON = (By.XPATH, "//input[@type='submit' and @value='Continue']")
    SUCCESS_MESSG = (By.CSS_SELECTOR, "div#content h1")
    LOGOUT_LINK = (By.LINK_TEXT, "Logout")
    REGISTER_LINK = (By.LINK_TEXT, "Register")

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        telephone: str,
        password: str,
        subscribe: str,
    ) -> bool:
        """
        Fill and submit the registration form.

        Returns:
            True when the success heading appears; the page then logs out and
            reopens the register form so the next row can be submitted.
            False when the heading differs, leaving the browser as it is.
        """
        self.type_text(self.FIRST_NAME, first_name, DEFAULT_MEDIUM_TIME)
        self.type_text(self.LAST_NAME, last_name)
        self.type_text(self.EMAIL, email)
        self.type_text(self.TELEPHONE, telephone)
        self.type_text(self.PASSWORD, password)
        self.type_text(self.CONFIRM_PASSWORD, password)

        if subscribe.strip().lower() == "yes":
            self.click(self.SUBSCRIBE_YES)
        else:
            self.click(self.SUBSCRIBE_NO)

        self.click(self.AGREE_CHECKBOX)
        self.click(self.CONTINUE_BUTTON)

        heading = self.get_text(self.SUCCESS_MESSG, DEFAULT_MEDIUM_TIME)
        self.logger.info(f"registration heading : {heading}")

        if USER_REGISTER_SUCCESS_MESSG not in heading:
            return False

        self.click(self.LOGOUT_LINK)
        self.click(self.REGISTER_LINK)
        return True
