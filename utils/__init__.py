from utils.logger import logger, for_test
from utils.screenshot import take_screenshot
from utils.decorators import requires_api_key, timeout

__all__ = [
    "logger",
    "for_test",
    "take_screenshot",
    "requires_api_key",
    "timeout",
]
