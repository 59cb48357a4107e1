"""
設定管理模組
統一管理 Applitools Eyes、瀏覽器、等待時間等設定。
所有設定都在啟動時從環境變數讀取一次，方便 CI/CD 整合。
支援設定驗證，提前發現 runner / 瀏覽器 / viewport 設定錯誤。
"""

import os
import re
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SUPPORTED_BROWSERS = ("chrome", "firefox")
SUPPORTED_RUNNERS = ("classic", "ufg")

_VIEWPORT_PATTERN = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


class ConfigValidationError(Exception):
    """設定驗證失敗"""

    def __init__(self, errors: list[str]):
        self.errors = errors
        msg = "設定驗證失敗:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(msg)


def _env_flag(name: str) -> bool:
    # 只要有值就視為開啟，與 HEADLESS=1 / HEADLESS=true 的慣例一致
    return bool(os.getenv(name, "").strip())


# 數值型環境變數的解析錯誤，延後到 Config.validate() 一併回報
_ENV_ERRORS: list[str] = []


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        _ENV_ERRORS.append(f"{name} 必須為整數: '{raw}'")
        return default


class Config:
    """框架全域設定"""

    # Applitools Eyes
    APPLITOOLS_API_KEY = os.getenv("APPLITOOLS_API_KEY") or None
    APPLITOOLS_SERVER_URL = os.getenv("APPLITOOLS_SERVER_URL") or None
    APP_NAME = os.getenv("APPLITOOLS_APP_NAME", "ACME Bank")
    BATCH_NAME = os.getenv(
        "APPLITOOLS_BATCH_NAME",
        "Example: Selenium Python pytest with the Classic Runner",
    )
    RUNNER = os.getenv("APPLITOOLS_RUNNER", "classic").lower()
    UFG_CONCURRENCY = _env_int("APPLITOOLS_UFG_CONCURRENCY", 5)
    CLOSE_SYNC = _env_flag("APPLITOOLS_CLOSE_SYNC")
    # 預設在 suite 結束時因視覺差異失敗；設定後只記錄結果
    IGNORE_DIFFS = _env_flag("APPLITOOLS_IGNORE_DIFFS")

    # 瀏覽器
    BROWSER = os.getenv("BROWSER", "chrome").lower()
    HEADLESS = _env_flag("HEADLESS")
    SELENIUM_REMOTE_URL = os.getenv("SELENIUM_REMOTE_URL") or None
    VIEWPORT = os.getenv("VIEWPORT", "1024x768")

    # 受測網站
    BASE_URL = os.getenv("BASE_URL", "https://demo.applitools.com")

    # 超時設定 (秒)
    IMPLICIT_WAIT = _env_int("IMPLICIT_WAIT", 10)
    EXPLICIT_WAIT = _env_int("EXPLICIT_WAIT", 15)
    TEST_TIMEOUT = _env_int("TEST_TIMEOUT", 120)

    # 截圖與報告
    SCREENSHOT_DIR = BASE_DIR / "screenshots"
    REPORT_DIR = BASE_DIR / "reports"

    @classmethod
    def headless_args(cls) -> list[str]:
        """瀏覽器啟動參數：headless 模式用於 CI，本機開發用有畫面模式"""
        return ["--headless=new"] if cls.HEADLESS else []

    @classmethod
    def viewport(cls) -> tuple[int, int]:
        """
        解析 viewport 設定。

        Returns:
            (width, height)

        Raises:
            ConfigValidationError: 格式錯誤或尺寸非正數
        """
        match = _VIEWPORT_PATTERN.match(cls.VIEWPORT or "")
        if not match:
            raise ConfigValidationError(
                [f"VIEWPORT 格式錯誤: '{cls.VIEWPORT}' (應為 WIDTHxHEIGHT)"]
            )
        width, height = int(match.group(1)), int(match.group(2))
        if width <= 0 or height <= 0:
            raise ConfigValidationError(
                [f"VIEWPORT 尺寸必須為正數: {width}x{height}"]
            )
        return width, height

    @classmethod
    def validate(cls) -> list[str]:
        """
        驗證整體設定。

        Returns:
            警告訊息列表

        Raises:
            ConfigValidationError: 有任何錯誤時拋出（包含所有錯誤）
        """
        errors: list[str] = []
        warnings: list[str] = []

        errors.extend(_ENV_ERRORS)
        if cls.BROWSER not in SUPPORTED_BROWSERS:
            errors.append(
                f"不支援的瀏覽器: {cls.BROWSER} (可用: {', '.join(SUPPORTED_BROWSERS)})"
            )
        if cls.RUNNER not in SUPPORTED_RUNNERS:
            errors.append(
                f"不支援的 runner: {cls.RUNNER} (可用: {', '.join(SUPPORTED_RUNNERS)})"
            )
        if cls.UFG_CONCURRENCY < 1:
            errors.append(f"APPLITOOLS_UFG_CONCURRENCY 必須 >= 1: {cls.UFG_CONCURRENCY}")

        try:
            cls.viewport()
        except ConfigValidationError as e:
            errors.extend(e.errors)

        if not cls.APPLITOOLS_API_KEY:
            warnings.append("未設定 APPLITOOLS_API_KEY，視覺檢查結果無法上傳")

        if errors:
            raise ConfigValidationError(errors)

        return warnings
