"""
Applitools Eyes 生命週期管理

負責建立 runner / batch / configuration，開啟與關閉 Eyes session，
以及在整個測試 session 結束時收集所有視覺檢查結果。

視覺比對與結果儲存都在 Applitools 服務端完成，這裡只負責依序呼叫 SDK。
SDK 拋出的例外不做任何包裝。

用法：
    runner = EyesManager.create_runner()
    config = EyesManager.create_configuration(EyesManager.create_batch())
    EyesManager.open_eyes(driver, runner, config, "test_login")
    EyesManager.check_window("Login page")
    EyesManager.close_eyes()
    EyesManager.collect_results(runner)
"""

import threading

from applitools.selenium import (
    BatchInfo,
    BrowserType,
    ClassicRunner,
    Configuration,
    DeviceName,
    Eyes,
    RectangleSize,
    RunnerOptions,
    ScreenOrientation,
    Target,
    VisualGridRunner,
)

from config.config import Config
from core.exceptions import EyesNotOpenError, UnsupportedRunnerError
from utils.logger import logger

# Ultrafast Grid 跨瀏覽器渲染組合：(寬, 高, 瀏覽器)
UFG_BROWSERS = [
    (800, 600, BrowserType.CHROME),
    (1600, 1200, BrowserType.FIREFOX),
    (1024, 768, BrowserType.SAFARI),
]
UFG_DEVICES = [
    (DeviceName.Pixel_2, ScreenOrientation.PORTRAIT),
    (DeviceName.Nexus_10, ScreenOrientation.LANDSCAPE),
]


class EyesManager:
    """
    管理 Applitools Eyes 物件的建立與關閉

    runner / configuration 由整個測試 session 共用；
    Eyes 物件每個測試一個，使用 thread-local 儲存。
    """

    _local = threading.local()
    last_summary = None

    # ── Session 共用物件 ──

    @staticmethod
    def create_runner(kind: str | None = None):
        """
        建立 runner。

        Args:
            kind: 'classic'（本機瀏覽器截圖）或 'ufg'（Ultrafast Grid 跨瀏覽器）

        Raises:
            UnsupportedRunnerError: 不支援的 runner 類型
        """
        kind = (kind or Config.RUNNER).lower()
        if kind == "classic":
            runner = ClassicRunner()
        elif kind == "ufg":
            runner = VisualGridRunner(
                RunnerOptions().test_concurrency(Config.UFG_CONCURRENCY)
            )
        else:
            raise UnsupportedRunnerError(kind)
        logger.info(f"Eyes runner 已建立: {kind}")
        return runner

    @staticmethod
    def create_batch(name: str | None = None) -> BatchInfo:
        """建立 batch（dashboard 上一組視覺檢查的分類名稱）"""
        return BatchInfo(name or Config.BATCH_NAME)

    @staticmethod
    def create_configuration(
        batch: BatchInfo, runner_kind: str | None = None
    ) -> Configuration:
        """
        建立所有測試共用的 Eyes configuration。

        API key 未設定時不呼叫 set_api_key，讓 SDK 自行讀取 APPLITOOLS_API_KEY。
        """
        config = Configuration()
        if Config.APPLITOOLS_API_KEY:
            config.set_api_key(Config.APPLITOOLS_API_KEY)
        if Config.APPLITOOLS_SERVER_URL:
            config.set_server_url(Config.APPLITOOLS_SERVER_URL)
        config.set_batch(batch)
        config.set_app_name(Config.APP_NAME)
        width, height = Config.viewport()
        config.set_viewport_size(RectangleSize(width, height))

        if (runner_kind or Config.RUNNER).lower() == "ufg":
            for w, h, browser_type in UFG_BROWSERS:
                config.add_browser(w, h, browser_type)
            for device, orientation in UFG_DEVICES:
                config.add_device_emulation(device, orientation)

        return config

    # ── 每個測試的 Eyes ──

    @classmethod
    def open_eyes(cls, driver, runner, configuration: Configuration,
                  test_name: str) -> Eyes:
        """建立 Eyes 並開始視覺測試"""
        eyes = Eyes(runner)
        eyes.set_configuration(configuration)
        width, height = Config.viewport()
        eyes.open(
            driver=driver,
            app_name=Config.APP_NAME,
            test_name=test_name,
            viewport_size=RectangleSize(width, height),
        )
        cls._local.eyes = eyes
        logger.info(f"Eyes 已開啟: {Config.APP_NAME} / {test_name} ({width}x{height})")
        return eyes

    @classmethod
    def get_eyes(cls) -> Eyes:
        eyes = getattr(cls._local, "eyes", None)
        if eyes is None:
            raise EyesNotOpenError()
        return eyes

    @classmethod
    def check_window(cls, name: str, layout: bool = False) -> None:
        """
        對整個視窗做視覺檢查。

        Args:
            name: 檢查點名稱（顯示在 dashboard）
            layout: True 時使用 LAYOUT match level，忽略文字內容差異
        """
        target = Target.window().fully().with_name(name)
        if layout:
            target = target.layout()
        logger.info(f"視覺檢查: {name}{' (layout)' if layout else ''}")
        cls.get_eyes().check(target)

    @classmethod
    def close_eyes(cls, sync: bool | None = None):
        """
        關閉 Eyes，通知 server 可以顯示結果。

        close_async() 不等待檢查完成，unresolved / failed 不會讓測試失敗，
        回傳 None；sync=True 時改用 close()，有差異就拋出例外，
        成功時回傳該測試的 TestResults。
        關閉失敗時保留 Eyes 參照，讓呼叫端可以 abort_eyes()。
        """
        eyes = getattr(cls._local, "eyes", None)
        if eyes is None:
            return None
        sync = Config.CLOSE_SYNC if sync is None else sync
        results = None
        if sync:
            results = eyes.close()
        else:
            eyes.close_async()
        cls._local.eyes = None
        logger.info(f"Eyes 已關閉 ({'sync' if sync else 'async'})")
        return results

    @classmethod
    def abort_eyes(cls) -> None:
        """放棄目前的 Eyes session（無法正常關閉時使用）"""
        eyes = getattr(cls._local, "eyes", None)
        if eyes is None:
            return
        try:
            eyes.abort_async()
        finally:
            cls._local.eyes = None
        logger.warning("Eyes session 已中止")

    # ── 結果收集 ──

    @classmethod
    def collect_results(cls, runner):
        """
        等待所有視覺檢查完成並回傳結果摘要。

        預設沿用 SDK 行為：有 unresolved / failed 的檢查點時拋出例外，
        讓 session 結束時失敗。設定 APPLITOOLS_IGNORE_DIFFS 後只記錄結果。
        """
        if Config.IGNORE_DIFFS:
            summary = runner.get_all_test_results(False)
        else:
            summary = runner.get_all_test_results()
        cls.last_summary = summary
        for row in cls.summarize(summary):
            line = (
                f"視覺結果: {row['name']} -> {row['status']} "
                f"(steps={row['steps']}, mismatches={row['mismatches']}) {row['url']}"
            )
            if row["exception"]:
                logger.error(f"{line} 例外: {row['exception']}")
            else:
                logger.info(line)
        return summary

    @staticmethod
    def summarize(summary) -> list[dict]:
        """將 TestResultsSummary 攤平成易於輸出的 dict 列表"""
        rows = []
        if summary is None:
            return rows
        for container in summary.all_results:
            results = container.test_results
            exception = container.exception
            status = results.status if results else None
            rows.append({
                "name": results.name if results else "<unknown>",
                "status": getattr(status, "value", status) or "Error",
                "url": results.url if results else "",
                "steps": results.steps if results else 0,
                "mismatches": results.mismatches if results else 0,
                "exception": str(exception) if exception else "",
            })
        return rows
