"""
Unit tests for the page objects.

Pages run against the in-memory FakeDriver from conftest; locators that are
not registered on the fake are absent from the page.
"""

import pytest
from selenium.webdriver.common.by import By

from opencart_ui.constants import (
    ACC_PAGE_HEADERS_LIST,
    LOGIN_PAGE_TITLE,
    USER_REGISTER_SUCCESS_MESSG,
)
from opencart_ui.core.exceptions import ElementNotFoundError
from opencart_ui.pages import (
    AccountsPage,
    BasePage,
    LoginPage,
    ProductInfoPage,
    RegisterPage,
    SearchResultsPage,
)


class TestBasePage:
    """Wait helpers shared by every page."""

    def test_wait_for_visible(self, browser_session, fake_driver):
        element = fake_driver.add((By.ID, "input-email"))

        assert BasePage(browser_session).wait_for_visible((By.ID, "input-email")) is element

    def test_timeout_names_locator_and_operation(self, browser_session):
        page = BasePage(browser_session)

        with pytest.raises(ElementNotFoundError) as exc_info:
            page.wait_for_visible((By.ID, "nowhere"), timeout=0.1)

        error = exc_info.value
        assert error.locator == (By.ID, "nowhere")
        assert error.operation == "wait_for_visible"
        assert error.timeout == 0.1

    def test_hidden_element_is_not_visible(self, browser_session, fake_driver):
        fake_driver.add((By.ID, "hidden"), displayed=False)

        with pytest.raises(ElementNotFoundError):
            BasePage(browser_session).wait_for_visible((By.ID, "hidden"), timeout=0.1)

    def test_is_displayed_never_raises(self, browser_session):
        assert BasePage(browser_session).is_displayed((By.ID, "nowhere")) is False

    def test_type_text_replaces_value(self, browser_session, fake_driver):
        element = fake_driver.add((By.ID, "input-email"))
        element.typed = ["stale"]

        BasePage(browser_session).type_text((By.ID, "input-email"), "user@example.com")

        assert element.typed == ["user@example.com"]


class TestLoginPage:
    """Test cases for LoginPage."""

    def test_title(self, browser_session, fake_driver):
        fake_driver.title = LOGIN_PAGE_TITLE

        assert LoginPage(browser_session).title() == LOGIN_PAGE_TITLE

    def test_title_mismatch_times_out(self, browser_session, fake_driver, monkeypatch):
        monkeypatch.setattr("opencart_ui.pages.login.DEFAULT_TIME", 0.1)
        fake_driver.title = "Something Else"

        with pytest.raises(ElementNotFoundError):
            LoginPage(browser_session).title()

    def test_url(self, browser_session, fake_driver):
        fake_driver.current_url = "https://shop.example.com/index.php?route=account/login"

        assert LoginPage(browser_session).url().endswith("route=account/login")

    def test_forgot_password_link(self, browser_session, fake_driver):
        page = LoginPage(browser_session)
        assert page.is_forgot_password_link_exist() is False

        fake_driver.add(LoginPage.FORGOT_PWD_LINK)
        assert page.is_forgot_password_link_exist() is True

    def test_login_returns_accounts_page(self, browser_session, fake_driver):
        email = fake_driver.add(LoginPage.EMAIL)
        password = fake_driver.add(LoginPage.PASSWORD)
        button = fake_driver.add(LoginPage.LOGIN_BUTTON)

        accounts_page = LoginPage(browser_session).login("user@example.com", "secret")

        assert isinstance(accounts_page, AccountsPage)
        assert accounts_page.session is browser_session
        assert email.typed == ["user@example.com"]
        assert password.typed == ["secret"]
        assert button.clicks == 1

    def test_go_to_register(self, browser_session, fake_driver):
        fake_driver.add(LoginPage.REGISTER_LINK)

        assert isinstance(LoginPage(browser_session).go_to_register(), RegisterPage)


class TestAccountsPage:
    """Test cases for AccountsPage."""

    def test_headers(self, browser_session, fake_driver):
        fake_driver.add(AccountsPage.HEADERS, *ACC_PAGE_HEADERS_LIST)

        assert AccountsPage(browser_session).headers() == ACC_PAGE_HEADERS_LIST

    def test_logout_link(self, browser_session, fake_driver):
        fake_driver.add(AccountsPage.LOGOUT_LINK)

        assert AccountsPage(browser_session).is_logout_link_exist() is True

    def test_search(self, browser_session, fake_driver):
        field = fake_driver.add(AccountsPage.SEARCH)
        icon = fake_driver.add(AccountsPage.SEARCH_ICON)

        results_page = AccountsPage(browser_session).search("macbook")

        assert isinstance(results_page, SearchResultsPage)
        assert field.typed == ["macbook"]
        assert icon.clicks == 1

    def test_search_without_field_returns_none(self, browser_session):
        page = AccountsPage(browser_session)

        assert page.is_search_exist() is False
        assert page.search("macbook") is None


class TestSearchResultsPage:
    """Test cases for SearchResultsPage."""

    def test_results_count(self, browser_session, fake_driver):
        fake_driver.add(SearchResultsPage.SEARCH_RESULT, "MacBook", "MacBook Air", "MacBook Pro")

        assert SearchResultsPage(browser_session).results_count() == 3

    def test_select_product(self, browser_session, fake_driver):
        link = fake_driver.add((By.LINK_TEXT, "MacBook Pro"))

        product_page = SearchResultsPage(browser_session).select_product("MacBook Pro")

        assert isinstance(product_page, ProductInfoPage)
        assert link.clicks == 1

    def test_select_missing_product(self, browser_session, monkeypatch):
        monkeypatch.setattr("opencart_ui.pages.search_results.DEFAULT_TIME", 0.1)

        with pytest.raises(ElementNotFoundError) as exc_info:
            SearchResultsPage(browser_session).select_product("Nokia 3310")

        assert exc_info.value.locator == (By.LINK_TEXT, "Nokia 3310")


class TestProductInfoPage:
    """Test cases for ProductInfoPage."""

    @pytest.fixture
    def product_page(self, browser_session, fake_driver):
        fake_driver.add(ProductInfoPage.PRODUCT_HEADER, "MacBook Pro")
        fake_driver.add(ProductInfoPage.PRODUCT_IMAGES, "", "", "", "")
        fake_driver.add(
            ProductInfoPage.PRODUCT_META_DATA,
            "Brand: Apple",
            "Product Code: Product 18",
            "Reward Points: 800",
            "Availability: In Stock",
        )
        fake_driver.add(ProductInfoPage.PRODUCT_PRICE_DATA, "$2,000.00", "Ex Tax: $2,000.00")
        return ProductInfoPage(browser_session)

    def test_header_and_images(self, product_page):
        assert product_page.header() == "MacBook Pro"
        assert product_page.images_count() == 4

    def test_get_info(self, product_page):
        assert product_page.get_info() == {
            "productname": "MacBook Pro",
            "productimagescount": "4",
            "Brand": "Apple",
            "Product Code": "Product 18",
            "Reward Points": "800",
            "Availability": "In Stock",
            "productprice": "$2,000.00",
            "exTaxPrice": "$2,000.00",
        }

    def test_meta_line_without_label_is_skipped(self, product_page, fake_driver):
        fake_driver.add(ProductInfoPage.PRODUCT_META_DATA, "Brand: Apple", "Pre-order now")

        info = product_page.get_info()

        assert info["Brand"] == "Apple"
        assert "Pre-order now" not in info

    def test_value_keeps_later_colons(self, product_page, fake_driver):
        fake_driver.add(ProductInfoPage.PRODUCT_META_DATA, "Availability: Ships at 10:00")

        assert product_page.get_info()["Availability"] == "Ships at 10:00"

    def test_price_without_ex_tax_line(self, product_page, fake_driver):
        fake_driver.add(ProductInfoPage.PRODUCT_PRICE_DATA, " $122.00 ")

        info = product_page.get_info()

        assert info["productprice"] == "$122.00"
        assert "exTaxPrice" not in info


class TestRegisterPage:
    """Test cases for RegisterPage."""

    @pytest.fixture
    def register_form(self, fake_driver):
        fields = {
            name: fake_driver.add(getattr(RegisterPage, name))
            for name in (
                "FIRST_NAME", "LAST_NAME", "EMAIL", "TELEPHONE", "PASSWORD", "CONFIRM_PASSWORD",
                "SUBSCRIBE_YES", "SUBSCRIBE_NO", "AGREE_CHECKBOX", "CONTINUE_BUTTON",
                "LOGOUT_LINK", "REGISTER_LINK",
            )
        }
        return fields

    def test_successful_registration(self, browser_session, fake_driver, register_form):
        fake_driver.add(RegisterPage.SUCCESS_MESSG, USER_REGISTER_SUCCESS_MESSG)

        result = RegisterPage(browser_session).register(
            "Arun", "Kumar", "arun@example.com", "9876543210", "arun@123", "yes"
        )

        assert result is True
        assert register_form["EMAIL"].typed == ["arun@example.com"]
        assert register_form["CONFIRM_PASSWORD"].typed == ["arun@123"]
        assert register_form["SUBSCRIBE_YES"].clicks == 1
        assert register_form["SUBSCRIBE_NO"].clicks == 0
        # form is reopened for the next row
        assert fake_driver.clicked[-2:] == ["Logout", "Register"]

    def test_subscribe_no(self, browser_session, fake_driver, register_form):
        fake_driver.add(RegisterPage.SUCCESS_MESSG, USER_REGISTER_SUCCESS_MESSG)

        RegisterPage(browser_session).register(
            "Priya", "Sharma", "priya@example.com", "9876543211", "priya@123", "No"
        )

        assert register_form["SUBSCRIBE_NO"].clicks == 1
        assert register_form["SUBSCRIBE_YES"].clicks == 0

    def test_failed_registration(self, browser_session, fake_driver, register_form):
        fake_driver.add(RegisterPage.SUCCESS_MESSG, "Register Account")

        result = RegisterPage(browser_session).register(
            "Arun", "Kumar", "taken@example.com", "9876543210", "arun@123", "yes"
        )

        assert result is False
        assert register_form["LOGOUT_LINK"].clicks == 0
        assert register_form["REGISTER_LINK"].clicks == 0
