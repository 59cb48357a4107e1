"""
Page Object 基底類別

所有 Page Object 都繼承此類，提供通用的元素操作方法。
元素查找依賴 driver 的 implicit wait；Selenium 拋出的例外
（NoSuchElementException 等）原樣往上傳，由 pytest 回報。
"""

from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from selenium.common.exceptions import TimeoutException

from config.config import Config
from utils.logger import logger
from utils.screenshot import take_screenshot


class BasePage:
    """
    Page Object 基底類別

    提供：
    - 頁面載入
    - 元素查找、點擊、輸入
    - 元素存在判斷（不拋例外）
    - 截圖
    """

    def __init__(self, driver, timeout: int | None = None):
        self.driver = driver
        self.timeout = timeout or Config.EXPLICIT_WAIT

    # ── 頁面載入 ──

    def open(self, url: str) -> None:
        logger.info(f"載入頁面: {url}")
        self.driver.get(url)

    # ── 元素查找 ──

    def find_element(self, locator: tuple) -> WebElement:
        """查找元素（由 implicit wait 負責等待）"""
        return self.driver.find_element(*locator)

    def is_element_present(self, locator: tuple, timeout: int | None = None) -> bool:
        """判斷元素是否存在（不拋出例外）"""
        try:
            WebDriverWait(self.driver, timeout or self.timeout).until(
                EC.presence_of_element_located(locator)
            )
            return True
        except TimeoutException:
            return False

    # ── 元素操作 ──

    def click(self, locator: tuple) -> None:
        logger.info(f"點擊元素: {locator}")
        self.find_element(locator).click()

    def input_text(self, locator: tuple, text: str) -> None:
        """直接送出按鍵，不先清除欄位內容"""
        logger.info(f"輸入文字 -> {locator}")
        self.find_element(locator).send_keys(text)

    def get_text(self, locator: tuple) -> str:
        return self.find_element(locator).text

    # ── 頁面狀態 ──

    def screenshot(self, name: str) -> str:
        """截圖並回傳檔案路徑"""
        return take_screenshot(self.driver, name)
