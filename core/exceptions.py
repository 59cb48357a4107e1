"""
自訂 Exception 體系

只涵蓋框架本身偵測到的錯誤（設定、driver 生命週期、Eyes session 狀態）。
Selenium 與 Eyes SDK 拋出的例外不會被包裝，原樣交給 pytest 回報。

Exception 樹：
    VisualTestFrameworkError
    ├── DriverError
    │   ├── DriverNotInitializedError
    │   └── UnsupportedBrowserError
    └── EyesError
        ├── EyesNotOpenError
        └── UnsupportedRunnerError

設定錯誤見 config.config.ConfigValidationError。
"""


class VisualTestFrameworkError(Exception):
    """框架所有例外的基底，catch 這個就能攔截一切框架錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── Driver 相關 ──

class DriverError(VisualTestFrameworkError):
    """Driver 相關錯誤"""


class DriverNotInitializedError(DriverError):
    """Driver 尚未初始化就被使用"""

    def __init__(self, message: str = "Driver 尚未建立，請先呼叫 create_driver()"):
        super().__init__(message)


class UnsupportedBrowserError(DriverError):
    """不支援的瀏覽器"""

    def __init__(self, browser: str = ""):
        super().__init__(f"不支援的瀏覽器: {browser}", context={"browser": browser})


# ── Eyes 相關 ──

class EyesError(VisualTestFrameworkError):
    """Applitools Eyes session 相關錯誤"""


class EyesNotOpenError(EyesError):
    """Eyes 尚未 open 就執行視覺檢查"""

    def __init__(self, message: str = "Eyes 尚未開啟，請先呼叫 open_eyes()"):
        super().__init__(message)


class UnsupportedRunnerError(EyesError):
    """不支援的 runner 類型"""

    def __init__(self, runner: str = ""):
        super().__init__(f"不支援的 runner: {runner}", context={"runner": runner})

