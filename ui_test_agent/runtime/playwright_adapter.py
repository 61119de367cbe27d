import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

from playwright.async_api import Browser, BrowserContext, Page, Playwright

from ui_test_agent.artifacts import ensure_dir
from ui_test_agent.core.exceptions import ElementNotFoundError, NavigationError
from ui_test_agent.core.models import Viewport

logger = logging.getLogger(__name__)

# Default timeouts (can be overridden per adapter)
DEFAULT_NAV_TIMEOUT_MS = int(os.environ.get("NAV_TIMEOUT_MS", "30000"))
DEFAULT_ACTION_TIMEOUT_MS = int(os.environ.get("ACTION_TIMEOUT_MS", "5000"))

AXE_CDN_URL = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.5.0/axe.min.js"


class PlaywrightAdapter:
    """Thin async wrapper over a Playwright page.

    Element queries other than ``count`` wait for visibility first. Playwright
    errors are wrapped in ElementNotFoundError / NavigationError so callers
    can record them against the assertion that triggered them.
    """

    def __init__(
        self,
        page: Page,
        base_url: str,
        nav_timeout_ms: int | None = None,
        action_timeout_ms: int | None = None,
    ):
        self.page = page
        self.base_url = base_url.rstrip("/") + "/"
        self.nav_timeout_ms = (
            nav_timeout_ms if nav_timeout_ms is not None else DEFAULT_NAV_TIMEOUT_MS
        )
        self.action_timeout_ms = (
            action_timeout_ms if action_timeout_ms is not None else DEFAULT_ACTION_TIMEOUT_MS
        )

    def resolve_url(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return urljoin(self.base_url, url.lstrip("/"))

    async def navigate(self, url: str) -> None:
        full_url = self.resolve_url(url)
        logger.info(f"Navigating to {full_url}")
        try:
            await self.page.goto(full_url, wait_until="networkidle", timeout=self.nav_timeout_ms)
        except Exception as e:
            raise NavigationError(f"Navigation to {full_url} failed: {e}") from e

    async def wait_visible(self, selector: str) -> None:
        try:
            await self.page.wait_for_selector(selector, state="visible", timeout=self.action_timeout_ms)
        except Exception as e:
            raise ElementNotFoundError(f"Element {selector} not visible: {e}") from e

    async def _query(self, selector: str, description: str, func) -> Any:
        await self.wait_visible(selector)
        try:
            return await func()
        except Exception as e:
            raise ElementNotFoundError(f"{description} failed for {selector}: {e}") from e

    async def is_visible(self, selector: str) -> bool:
        return await self._query(selector, "Visibility check", lambda: self.page.is_visible(selector))

    async def text_content(self, selector: str) -> str | None:
        return await self._query(selector, "Text lookup", lambda: self.page.text_content(selector))

    async def get_attribute(self, selector: str, name: str) -> str | None:
        return await self._query(selector, "Attribute lookup", lambda: self.page.get_attribute(selector, name))

    async def count(self, selector: str) -> int:
        """Number of matching elements; does not wait, so zero is a valid answer."""
        try:
            return await self.page.locator(selector).count()
        except Exception as e:
            raise ElementNotFoundError(f"Count failed for {selector}: {e}") from e

    async def css_property(self, selector: str, prop: str) -> str:
        return await self._query(
            selector,
            "Computed style lookup",
            lambda: self.page.eval_on_selector(
                selector, "(el, prop) => getComputedStyle(el).getPropertyValue(prop)", prop
            ),
        )

    async def click(self, selector: str) -> None:
        logger.info(f"Clicking: {selector}")
        await self._query(selector, "Click", lambda: self.page.click(selector, timeout=self.action_timeout_ms))

    async def set_checked(self, selector: str, checked: bool) -> None:
        await self._query(
            selector,
            "Check" if checked else "Uncheck",
            lambda: self.page.set_checked(selector, checked, timeout=self.action_timeout_ms),
        )

    async def select_option(self, selector: str, value: str) -> None:
        await self._query(
            selector, "Select", lambda: self.page.select_option(selector, value, timeout=self.action_timeout_ms)
        )

    async def fill(self, selector: str, value: str) -> None:
        logger.info(f"Typing into {selector}")
        await self._query(selector, "Fill", lambda: self.page.fill(selector, value, timeout=self.action_timeout_ms))

    async def wait(self, duration_ms: int) -> None:
        await self.page.wait_for_timeout(duration_ms)

    async def screenshot(self, path: Path) -> str:
        """Capture a full-page screenshot to ``path``."""
        ensure_dir(path.parent)
        await self.page.screenshot(path=str(path), full_page=True)
        logger.info(f"📸 Screenshot saved to {path}")
        return str(path)

    async def run_axe(self, axe_url: str = AXE_CDN_URL) -> dict[str, Any]:
        """Inject axe-core and return its results."""
        await self.page.add_script_tag(url=axe_url)
        return await self.page.evaluate("() => axe.run()")

    async def video_path(self) -> str | None:
        video = self.page.video
        if video is None:
            return None
        return str(await video.path())


async def create_playwright_context(
    base_url: str,
    headless: bool = True,
    viewport: Viewport | None = None,
    video_dir: Path | None = None,
    nav_timeout_ms: int | None = None,
    action_timeout_ms: int | None = None,
) -> tuple[Playwright, Browser, BrowserContext, PlaywrightAdapter]:
    """Factory to create a configured Chromium context and adapter."""
    from playwright.async_api import async_playwright

    playwright = await async_playwright().start()
    browser = await playwright.chromium.launch(headless=headless)

    context_options: dict[str, Any] = {
        "viewport": {"width": viewport.width, "height": viewport.height} if viewport else {"width": 1280, "height": 720},
    }
    if video_dir is not None:
        context_options["record_video_dir"] = str(video_dir)

    context = await browser.new_context(**context_options)
    page = await context.new_page()
    adapter = PlaywrightAdapter(
        page,
        base_url,
        nav_timeout_ms=nav_timeout_ms,
        action_timeout_ms=action_timeout_ms,
    )

    return playwright, browser, context, adapter
