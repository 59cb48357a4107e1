"""
截圖工具
測試失敗時自動截下瀏覽器畫面，方便 debug。
這是本機的除錯截圖，與 Eyes 的視覺檢查點無關。
"""

import re
from datetime import datetime

from config.config import Config
from utils.logger import logger

_UNSAFE_CHARS = re.compile(r"[^\w.-]+")


def take_screenshot(driver, name: str) -> str:
    """
    擷取瀏覽器截圖並儲存到 screenshots 目錄。

    Args:
        driver: WebDriver 實例
        name: 截圖名稱（不含副檔名，非法字元會換成底線）

    Returns:
        截圖檔案的完整路徑
    """
    Config.SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    safe_name = _UNSAFE_CHARS.sub("_", name).strip("_") or "screenshot"
    filepath = Config.SCREENSHOT_DIR / f"{safe_name}_{timestamp}.png"
    driver.save_screenshot(str(filepath))
    logger.info(f"截圖已儲存: {filepath}")
    return str(filepath)
