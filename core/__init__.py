"""
core：框架核心

統一匯出所有核心元件，方便外部 import。

用法：
    from core import BasePage, DriverManager, EyesManager
    from core import EyesNotOpenError, DriverNotInitializedError
"""

from core.base_page import BasePage
from core.driver_manager import DriverManager
from core.exceptions import (
    DriverError,
    DriverNotInitializedError,
    EyesError,
    EyesNotOpenError,
    UnsupportedBrowserError,
    UnsupportedRunnerError,
    VisualTestFrameworkError,
)
from core.eyes_manager import EyesManager

__all__ = [
    # Driver / Eyes / Page
    "DriverManager",
    "EyesManager",
    "BasePage",
    # Exceptions
    "VisualTestFrameworkError",
    "DriverError",
    "DriverNotInitializedError",
    "UnsupportedBrowserError",
    "EyesError",
    "EyesNotOpenError",
    "UnsupportedRunnerError",
]
