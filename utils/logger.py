"""
日誌模組
統一的 logging 設定，同時輸出到 console 與檔案。
瀏覽器操作、Eyes session 生命週期與視覺檢查結果都經由此 logger 記錄。

支援：
- Console 輸出（人類可讀格式）
- 檔案輸出（純文字 + 可選 JSON 結構化格式）
- 以測試名稱標記的 LoggerAdapter（for_test）
- 環境變數控制:
    LOG_LEVEL: console 日誌等級 (預設 INFO)
    LOG_JSON: 設為 "1" 啟用 JSON 結構化日誌檔
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

from config.config import Config

LOG_DIR = Config.REPORT_DIR
LOG_DIR.mkdir(exist_ok=True)


class JsonFormatter(logging.Formatter):
    """JSON 結構化日誌格式器，方便 CI 收集視覺測試執行紀錄"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        test_name = getattr(record, "test_name", None)
        if test_name:
            log_entry["test"] = test_name
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


class TestLogAdapter(logging.LoggerAdapter):
    """在每則訊息前加上測試名稱，並帶入 JSON log 的 test 欄位"""

    __test__ = False  # 避免被 pytest 當成測試類別收集

    def process(self, msg, kwargs):
        test_name = self.extra["test_name"]
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("test_name", test_name)
        return f"[{test_name}] {msg}", kwargs


def _create_logger() -> logging.Logger:
    _logger = logging.Logger("visual_test")
    _logger.setLevel(logging.DEBUG)

    console_level = getattr(
        logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
    )

    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-7s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    _logger.addHandler(console)

    file_handler = logging.FileHandler(LOG_DIR / "test.log", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    _logger.addHandler(file_handler)

    # JSON file handler（可選，設 LOG_JSON=1 啟用）
    if os.getenv("LOG_JSON", "").strip() == "1":
        json_handler = logging.FileHandler(
            LOG_DIR / "test.json.log", encoding="utf-8"
        )
        json_handler.setLevel(logging.DEBUG)
        json_handler.setFormatter(JsonFormatter())
        _logger.addHandler(json_handler)

    return _logger


logger = _create_logger()


def for_test(test_name: str) -> TestLogAdapter:
    """取得帶測試名稱前綴的 logger"""
    return TestLogAdapter(logger, {"test_name": test_name})
