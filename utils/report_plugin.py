"""
自訂 pytest 報告 plugin
在終端機輸出測試摘要：通過率、失敗清單、耗時，
以及 Applitools Eyes 回傳的每個視覺測試結果與 dashboard 連結。
由 conftest.py 的 pytest_plugins 載入。
"""

import time
from collections import defaultdict

from core.eyes_manager import EyesManager
from utils.logger import logger


class RunMetrics:
    """收集測試指標"""

    def __init__(self):
        self.results: dict[str, list] = defaultdict(list)
        self.durations: dict[str, float] = {}
        self.start_time: float = 0

    def record(self, nodeid: str, outcome: str, duration: float) -> None:
        self.results[outcome].append(nodeid)
        self.durations[nodeid] = duration


_metrics = RunMetrics()


def build_summary_lines(metrics: RunMetrics, visual_rows: list[dict],
                        total_time: float) -> list[str]:
    """組出摘要文字，沒有任何測試結果時回傳空列表"""
    passed = metrics.results.get("passed", [])
    failed = metrics.results.get("failed", [])
    skipped = metrics.results.get("skipped", [])
    total = len(passed) + len(failed) + len(skipped)

    if total == 0 and not visual_rows:
        return []

    pass_rate = len(passed) / total * 100 if total > 0 else 0

    sep = "=" * 60
    lines = [
        "",
        sep,
        "  視覺測試報告摘要",
        sep,
        "",
        f"  總計:   {total} 個測試",
        f"  通過:   {len(passed)}",
        f"  失敗:   {len(failed)}",
        f"  跳過:   {len(skipped)}",
        f"  通過率: {pass_rate:.1f}%",
        f"  總耗時: {total_time:.1f} 秒",
        "",
    ]

    if failed:
        lines.append("  --- 失敗測試 ---")
        for nodeid in failed:
            dur = metrics.durations.get(nodeid, 0)
            lines.append(f"    FAIL  {nodeid}  ({dur:.2f}s)")
        lines.append("")

    # Eyes 結果：unresolved / failed 不會讓 pytest 失敗，必須看這裡或 dashboard
    if visual_rows:
        lines.append("  --- Applitools 視覺結果 ---")
        for row in visual_rows:
            lines.append(
                f"    {row['status']:<10} {row['name']}  "
                f"(steps={row['steps']}, mismatches={row['mismatches']})"
            )
            if row["url"]:
                lines.append(f"               {row['url']}")
            if row["exception"]:
                lines.append(f"               例外: {row['exception']}")
        lines.append("")

    lines.append(sep)
    return lines


# ── pytest hooks ──

def pytest_sessionstart(session):
    """測試 session 開始"""
    _metrics.start_time = time.time()


def pytest_runtest_logreport(report):
    """每個測試結果回報"""
    if report.when == "call":
        _metrics.record(report.nodeid, report.outcome, report.duration)
    elif report.when == "setup" and report.skipped:
        _metrics.record(report.nodeid, "skipped", report.duration)


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """在終端機輸出自訂測試摘要"""
    total_time = time.time() - _metrics.start_time
    visual_rows = EyesManager.summarize(EyesManager.last_summary)
    lines = build_summary_lines(_metrics, visual_rows, total_time)
    if not lines:
        return

    terminalreporter.section("Visual Test Report", sep="=")
    for line in lines:
        terminalreporter.line(line)

    for line in lines:
        logger.info(line)
