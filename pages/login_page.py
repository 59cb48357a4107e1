"""
ACME Bank 登入頁面 Page Object

Applitools 的 demo 網站是一個假的網路銀行，任何帳密都能登入。
"""

from selenium.webdriver.common.by import By

from config.config import Config
from core.base_page import BasePage
from utils.allure_helper import allure_step


class LoginPage(BasePage):
    """登入頁面"""

    URL = Config.BASE_URL

    # ── Locators ──
    USERNAME_INPUT = (By.CSS_SELECTOR, "#username")
    PASSWORD_INPUT = (By.CSS_SELECTOR, "#password")
    LOGIN_BUTTON = (By.ID, "log-in")

    # ── 頁面操作 ──

    @allure_step("載入登入頁面")
    def load(self) -> "LoginPage":
        self.open(self.URL)
        return self

    def enter_username(self, username: str) -> "LoginPage":
        self.input_text(self.USERNAME_INPUT, username)
        return self

    def enter_password(self, password: str) -> "LoginPage":
        self.input_text(self.PASSWORD_INPUT, password)
        return self

    def click_login(self) -> None:
        self.click(self.LOGIN_BUTTON)

    @allure_step("輸入帳號密碼並登入")
    def login(self, username: str, password: str) -> None:
        """完整的登入流程"""
        self.enter_username(username)
        self.enter_password(password)
        self.click_login()

    # ── 頁面驗證 ──

    def is_login_page_displayed(self) -> bool:
        return self.is_element_present(self.LOGIN_BUTTON)
