"""Direct browser driving through Playwright."""

from ui_test_agent.runtime.accumulator import ResultAccumulator
from ui_test_agent.runtime.driver import PlaywrightDriver, run_accessibility_check
from ui_test_agent.runtime.playwright_adapter import PlaywrightAdapter, create_playwright_context

__all__ = [
    "ResultAccumulator",
    "PlaywrightDriver",
    "PlaywrightAdapter",
    "create_playwright_context",
    "run_accessibility_check",
]
