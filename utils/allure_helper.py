"""
Allure 報告整合輔助
封裝 Allure 常用的步驟標記與附件功能：
失敗截圖、頁面原始碼、Eyes dashboard 連結。
"""

import functools

import allure

from utils.logger import logger


def allure_step(title: str):
    """
    裝飾器：將函式標記為 Allure step。

    用法：
        @allure_step("輸入帳號密碼並登入")
        def login(self, user, pwd): ...
    """
    def decorator(func):
        @allure.step(title)
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)
        return wrapper
    return decorator


def attach_screenshot(driver, name: str = "截圖") -> None:
    """將截圖附加到 Allure 報告"""
    png = driver.get_screenshot_as_png()
    allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)


def attach_html(html: str, name: str = "頁面原始碼") -> None:
    """將 HTML 附加到 Allure 報告"""
    allure.attach(html, name=name, attachment_type=allure.attachment_type.HTML)


def attach_link(url: str, name: str = "Applitools 結果") -> None:
    """在目前測試加上外部連結（例如 Eyes dashboard）"""
    if not url:
        return
    allure.dynamic.link(url, name=name)
    logger.debug(f"Allure 連結: {name} -> {url}")
