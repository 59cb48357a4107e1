"""
Driver 生命週期管理

負責建立、取得、關閉 Selenium WebDriver，確保每個測試的瀏覽器 session 獨立。

支援：
- Chrome / Firefox，本機或遠端 Selenium Grid (SELENIUM_REMOTE_URL)
- headless 模式（CI 用）
- 執行緒安全（平行測試時每個 worker 獨立 driver）
- 遠端 server 連線前健康檢查（只記錄警告，不重試）
"""

import threading
import urllib.error
import urllib.request

from selenium import webdriver

from config.config import Config
from core.exceptions import (
    DriverNotInitializedError,
    UnsupportedBrowserError,
)
from utils.logger import logger


class DriverManager:
    """
    管理 Selenium WebDriver 的建立與銷毀

    使用 thread-local storage 確保平行測試時各 worker 的 driver 互不干擾。
    """

    _local = threading.local()

    # ── 瀏覽器選項 ──

    @staticmethod
    def build_options(browser: str, args: list[str] | None = None):
        """
        建立瀏覽器 options。

        Args:
            browser: 'chrome' 或 'firefox'
            args: 額外的啟動參數（例如 headless）

        Raises:
            UnsupportedBrowserError: 不支援的瀏覽器
        """
        if browser == "chrome":
            options = webdriver.ChromeOptions()
        elif browser == "firefox":
            options = webdriver.FirefoxOptions()
        else:
            raise UnsupportedBrowserError(browser)

        for arg in args or []:
            if browser == "firefox" and arg.startswith("--headless"):
                # Firefox 不認得 --headless=new
                arg = "-headless"
            options.add_argument(arg)
        return options

    # ── 遠端 Server 健康檢查 ──

    @classmethod
    def health_check(cls, url: str | None = None, timeout: float = 5.0) -> bool:
        """
        檢查遠端 Selenium server 是否可連線。

        Args:
            url: Selenium server URL，預設讀取 Config.SELENIUM_REMOTE_URL
            timeout: 連線逾時秒數

        Returns:
            True = server 可用, False = 不可用或未設定
        """
        url = url or Config.SELENIUM_REMOTE_URL
        if not url:
            return False
        status_url = f"{url.rstrip('/')}/status"
        try:
            req = urllib.request.Request(status_url, method="GET")
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return resp.status == 200
        except (urllib.error.URLError, OSError, TimeoutError):
            return False

    # ── Driver 建立 ──

    @classmethod
    def _start(cls, browser: str, options):
        remote_url = Config.SELENIUM_REMOTE_URL
        if remote_url:
            return webdriver.Remote(command_executor=remote_url, options=options)
        if browser == "chrome":
            return webdriver.Chrome(options=options)
        return webdriver.Firefox(options=options)

    @classmethod
    def create_driver(cls, browser: str | None = None) -> webdriver.Remote:
        """
        建立瀏覽器 driver。

        啟動只嘗試一次，Selenium 的例外（SessionNotCreatedException 等）
        原樣往上傳，由 pytest 回報。

        Args:
            browser: 'chrome' 或 'firefox'，預設讀取 Config.BROWSER

        Returns:
            WebDriver 實例
        """
        browser = (browser or Config.BROWSER).lower()
        options = cls.build_options(browser, Config.headless_args())

        remote_url = Config.SELENIUM_REMOTE_URL
        if remote_url and not cls.health_check(remote_url):
            logger.warning(f"Selenium server 健康檢查失敗: {remote_url}，仍嘗試連線...")

        drv = cls._start(browser, options)

        # 大型專案建議改用 explicit wait 做更細緻的控制
        drv.implicitly_wait(Config.IMPLICIT_WAIT)

        cls._local.driver = drv
        mode = "headless" if Config.HEADLESS else "headed"
        logger.info(f"Driver 已建立: {browser} ({mode}) -> {remote_url or 'local'}")

        return drv

    @classmethod
    def get_driver(cls) -> webdriver.Remote:
        """取得當前執行緒的 driver 實例"""
        drv = getattr(cls._local, "driver", None)
        if drv is None:
            raise DriverNotInitializedError()
        return drv

    @classmethod
    def quit_driver(cls) -> None:
        """安全關閉當前執行緒的 driver（quit 失敗時仍會清除參照）"""
        drv = getattr(cls._local, "driver", None)
        if drv is not None:
            try:
                drv.quit()
            finally:
                cls._local.driver = None
            logger.info("Driver 已關閉")
