"""
自訂 Decorators
提供常用的測試裝飾器：需要 Applitools API key 才執行、單測逾時。
"""

import functools
import signal
import sys
import threading

import pytest

from config.config import Config


def requires_api_key(func):
    """沒有 APPLITOOLS_API_KEY 時跳過（視覺檢查結果無處上傳）"""
    return pytest.mark.skipif(
        not Config.APPLITOOLS_API_KEY,
        reason="需要設定 APPLITOOLS_API_KEY",
    )(func)


def timeout(seconds: int):
    """
    單一測試逾時控制。超過指定秒數自動失敗。

    在 Unix/macOS 上使用 signal.SIGALRM（必須在主執行緒），
    其他情況使用 threading 作為 fallback。

    用法：
        @timeout(120)
        def test_login(self, driver, eyes):
            ...
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            message = f"測試 {func.__name__} 超過 {seconds} 秒逾時限制"
            use_alarm = (
                sys.platform != "win32"
                and threading.current_thread() is threading.main_thread()
            )
            if use_alarm:
                def _handler(signum, frame):
                    raise TimeoutError(message)
                old_handler = signal.signal(signal.SIGALRM, _handler)
                signal.alarm(seconds)
                try:
                    return func(*args, **kwargs)
                finally:
                    signal.alarm(0)
                    signal.signal(signal.SIGALRM, old_handler)

            result_box: list = []
            error_box: list = []

            def _run():
                try:
                    result_box.append(func(*args, **kwargs))
                except Exception as e:
                    error_box.append(e)

            thread = threading.Thread(target=_run, daemon=True)
            thread.start()
            thread.join(timeout=seconds)
            if thread.is_alive():
                raise TimeoutError(message)
            if error_box:
                raise error_box[0]
            return result_box[0] if result_box else None

        return wrapper
    return decorator
