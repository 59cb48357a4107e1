"""
pages.login_page 單元測試
驗證 ACME Bank 登入頁的 locator 與登入流程的呼叫順序。
"""

from unittest.mock import MagicMock, call, patch

import pytest
from selenium.webdriver.common.by import By

from pages.login_page import LoginPage


@pytest.mark.unit
class TestLoginPageLocators:
    """Locators"""

    def test_locators(self):
        assert LoginPage.USERNAME_INPUT == (By.CSS_SELECTOR, "#username")
        assert LoginPage.PASSWORD_INPUT == (By.CSS_SELECTOR, "#password")
        assert LoginPage.LOGIN_BUTTON == (By.ID, "log-in")

    def test_url_from_config(self):
        from config.config import Config

        assert LoginPage.URL == Config.BASE_URL


@pytest.mark.unit
class TestLoginFlow:
    """登入流程"""

    def test_load_returns_self(self):
        driver = MagicMock()
        page = LoginPage(driver)

        assert page.load() is page
        driver.get.assert_called_once_with(LoginPage.URL)

    def test_login_sequence(self):
        """帳號 → 密碼 → 點擊登入，依序執行"""
        driver = MagicMock()
        username_el, password_el, button_el = MagicMock(), MagicMock(), MagicMock()
        driver.find_element.side_effect = [username_el, password_el, button_el]

        LoginPage(driver).login(username="andy", password="i<3pandas")

        assert driver.find_element.call_args_list == [
            call(By.CSS_SELECTOR, "#username"),
            call(By.CSS_SELECTOR, "#password"),
            call(By.ID, "log-in"),
        ]
        username_el.send_keys.assert_called_once_with("andy")
        password_el.send_keys.assert_called_once_with("i<3pandas")
        button_el.click.assert_called_once()

    def test_is_login_page_displayed(self):
        page = LoginPage(MagicMock())
        with patch.object(page, "is_element_present", return_value=True) as mock_present:
            assert page.is_login_page_displayed() is True
        mock_present.assert_called_once_with(LoginPage.LOGIN_BUTTON)
