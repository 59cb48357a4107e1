"""
pytest 全域 fixtures

對應視覺測試的四個生命週期：
- suite setup：讀取並驗證設定、建立 runner / batch / Eyes configuration（session scope）
- per-test setup：開啟瀏覽器、開啟 Eyes（function scope）
- per-test teardown：關閉 Eyes、關閉瀏覽器，不論測試結果都會執行
- suite teardown：等待所有視覺檢查完成並輸出結果

另外提供：
- 命令列參數 (--browser, --runner)
- 失敗時自動截圖（含 Allure 報告附件）
- 自訂終端機報告 plugin
"""

import pytest
from selenium.common.exceptions import WebDriverException

from config.config import Config, SUPPORTED_BROWSERS, SUPPORTED_RUNNERS
from core.driver_manager import DriverManager
from core.eyes_manager import EyesManager
from utils.allure_helper import attach_html, attach_link, attach_screenshot
from utils.logger import for_test, logger
from utils.screenshot import take_screenshot

pytest_plugins = ["utils.report_plugin"]


# ── 命令列參數 ──

def pytest_addoption(parser):
    """新增自訂命令列參數"""
    parser.addoption(
        "--browser",
        action="store",
        default=Config.BROWSER,
        choices=list(SUPPORTED_BROWSERS),
        help="瀏覽器: chrome 或 firefox",
    )
    parser.addoption(
        "--runner",
        action="store",
        default=Config.RUNNER,
        choices=list(SUPPORTED_RUNNERS),
        help="Eyes runner: classic（本機截圖）或 ufg（Ultrafast Grid）",
    )


# ── Suite setup / teardown ──

@pytest.fixture(scope="session")
def browser_name(request) -> str:
    return request.config.getoption("--browser")


@pytest.fixture(scope="session")
def runner_kind(request) -> str:
    return request.config.getoption("--runner")


@pytest.fixture(scope="session")
def validated_config():
    """設定只讀取一次，所有測試共用"""
    for warning in Config.validate():
        logger.warning(warning)
    return Config


@pytest.fixture(scope="session")
def visual_runner(validated_config, runner_kind):
    """
    整個 session 共用的 Eyes runner。

    teardown 時等待所有視覺檢查完成並輸出結果。
    """
    runner = EyesManager.create_runner(runner_kind)
    yield runner
    logger.info("===== 收集 Applitools 視覺結果 =====")
    EyesManager.collect_results(runner)


@pytest.fixture(scope="session")
def batch(validated_config):
    """同一次執行的所有檢查點歸在同一個 batch"""
    return EyesManager.create_batch()


@pytest.fixture(scope="session")
def eyes_config(batch, runner_kind):
    return EyesManager.create_configuration(batch, runner_kind)


# ── Per-test setup / teardown ──

@pytest.fixture(scope="function")
def driver(validated_config, browser_name):
    """
    每個測試函式自動建立並銷毀瀏覽器。

    scope=function 確保每個測試獨立，互不影響。
    """
    logger.info(f"===== 建立 {browser_name} driver =====")
    drv = DriverManager.create_driver(browser_name)
    yield drv
    logger.info("===== 關閉 driver =====")
    DriverManager.quit_driver()


@pytest.fixture(scope="function")
def eyes(driver, visual_runner, eyes_config, request):
    """
    每個測試一個 Eyes，以測試名稱開啟。

    關閉失敗時中止 session 並讓錯誤往上傳；driver 的 teardown 照常執行。
    """
    test_name = request.node.name
    test_log = for_test(test_name)
    EyesManager.open_eyes(driver, visual_runner, eyes_config, test_name)
    yield EyesManager.get_eyes()

    try:
        results = EyesManager.close_eyes()
    except Exception:
        test_log.exception("Eyes 關閉失敗，中止 session")
        EyesManager.abort_eyes()
        raise
    if results is not None:
        attach_link(results.url)


# ── 測試生命週期 Hook ──

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """測試失敗時：本機截圖 + Allure 附件"""
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    test_log = for_test(item.name)
    test_log.error("測試失敗")

    driver = item.funcargs.get("driver")
    if driver is None:
        return
    try:
        take_screenshot(driver, f"FAIL_{item.name}")
        attach_screenshot(driver, f"失敗截圖: {item.name}")
        attach_html(driver.page_source, "頁面原始碼")
    except WebDriverException as e:
        # 瀏覽器可能已經掛掉，不影響原本的失敗回報
        test_log.warning(f"失敗截圖擷取失敗: {e}")
