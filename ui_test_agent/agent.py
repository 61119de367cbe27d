"""
UI testing agents.

``UITestingAgent`` generates Cypress specs from Actions, runs them through
the engine and renders the report. ``PlaywrightTestingAgent`` executes the
same Actions directly in a Playwright browser.

Usage:
    agent = UITestingAgent(AgentConfig.from_env(base_url="https://example.com"))
    agent.initialize()
    agent.build_test_suite("Example Test", [
        agent.navigate_to("/"),
        agent.test_element("h1", "text", "Example Domain"),
        agent.capture_screenshot("homepage"),
    ])
    result = agent.run_tests()
    agent.generate_report(result)
"""

import logging
import os
from pathlib import Path

from ui_test_agent.artifacts import ArtifactManager, ensure_dir, write_text
from ui_test_agent.builder.action_builder import ActionBuilder
from ui_test_agent.builder.assembler import ScriptAssembler
from ui_test_agent.core.config import AgentConfig
from ui_test_agent.core.models import (
    Action,
    AssertElementAction,
    FillFormAction,
    NavigateAction,
    RunResult,
    ScreenshotAction,
    WaitAction,
)
from ui_test_agent.report.renderer import ReportRenderer
from ui_test_agent.report.screenshots import render_screenshot_report
from ui_test_agent.runner.cypress_engine import CypressEngine, Engine, RunOptions
from ui_test_agent.runtime.accumulator import ResultAccumulator
from ui_test_agent.runtime.driver import PlaywrightDriver, run_accessibility_check
from ui_test_agent.runtime.playwright_adapter import PlaywrightAdapter, create_playwright_context
from ui_test_agent.targets.cypress import CypressTarget

logger = logging.getLogger(__name__)


class ActionFactory:
    """Convenience constructors for building suites fluently."""

    @staticmethod
    def navigate_to(url: str) -> NavigateAction:
        return NavigateAction(url=url)

    @staticmethod
    def test_element(selector: str, kind: str, expected: str | None = None) -> AssertElementAction:
        return AssertElementAction(selector=selector, kind=kind, expected=expected)

    @staticmethod
    def fill_form(fields: dict[str, bool | str]) -> FillFormAction:
        return FillFormAction(fields=fields)

    @staticmethod
    def capture_screenshot(name: str) -> ScreenshotAction:
        return ScreenshotAction(name=name)

    @staticmethod
    def wait(duration_ms: int) -> WaitAction:
        return WaitAction(duration_ms=duration_ms)


class UITestingAgent(ActionFactory):
    """Script-generating agent targeting Cypress."""

    def __init__(
        self,
        config: AgentConfig,
        target: CypressTarget | None = None,
        engine: Engine | None = None,
    ):
        self.config = config
        self.target = target or CypressTarget()
        self.project_dir = config.config_file.parent
        self.artifacts = ArtifactManager(config.root_dir, config.output_dir)
        self.builder = ActionBuilder(self.target)
        self.assembler = ScriptAssembler(self.target, self.artifacts.specs_dir)
        self.engine = engine or CypressEngine(project_dir=self.project_dir)
        self.spec_files: list[Path] = []

    def _relative(self, path: Path) -> str:
        return Path(os.path.relpath(path, self.project_dir)).as_posix()

    def initialize(self) -> None:
        """Create the directory layout and a ``cypress.config.js`` if none exists."""
        self.artifacts.ensure_layout()

        if not self.config.config_file.exists():
            content = self.target.render_config(
                base_url=self.config.base_url,
                output_dir=self._relative(self.artifacts.results_dir),
                spec_pattern=f"{self._relative(self.artifacts.specs_dir)}/**/*.cy.js",
                screenshots_dir=self._relative(self.artifacts.screenshots_dir),
                videos_dir=self._relative(self.artifacts.videos_dir),
            )
            write_text(self.config.config_file, content)
            logger.info(f"📄 Wrote {self.config.config_file}")

        logger.info("Testing agent initialized")

    def _track(self, path: Path) -> Path:
        if path not in self.spec_files:
            self.spec_files.append(path)
        return path

    def build_test_suite(self, name: str, actions: list[Action], stop_on_error: bool = True) -> Path:
        """Compile ``actions`` into one spec file and queue it for the next run."""
        descriptor = self.builder.build(name, actions, stop_on_error=stop_on_error)
        return self._track(self.assembler.write(descriptor))

    def generate_accessibility_test(self, name: str, path: str = "/") -> Path:
        """Write a cypress-axe spec and the support file that registers the plugin.

        The ``cypress-axe`` npm package itself must already be installed.
        """
        support_file = self.artifacts.support_dir / "e2e.js"
        if not support_file.exists():
            ensure_dir(self.artifacts.support_dir)
            write_text(support_file, self.target.render_support_file())
        return self._track(self.assembler.write_accessibility_suite(name, path))

    def generate_route_tests(self, accessibility: bool = True) -> list[Path]:
        """Write one route/viewport exploration spec per configured route."""
        paths = self.assembler.write_route_suites(
            self.config.routes,
            self.config.base_url,
            self.config.viewports,
            self.config.selectors,
            accessibility=accessibility,
        )
        for path in paths:
            self._track(path)
        return paths

    def run_options(self) -> RunOptions:
        return RunOptions(browser=self.config.browser, headless=self.config.headless)

    def run_tests(self, options: RunOptions | None = None) -> RunResult:
        """Run every queued spec file. Blocks until the engine returns."""
        return self.engine.run(list(self.spec_files), options or self.run_options())

    def generate_report(self, run_result: RunResult) -> tuple[Path, Path]:
        renderer = ReportRenderer(self.artifacts.results_dir)
        return renderer.render_run(run_result)

    def generate_screenshot_report(self) -> Path:
        return render_screenshot_report(
            self.artifacts.screenshots_dir,
            self.artifacts.reports_dir,
            viewport_count=len(self.config.viewports),
        )

    def run_workflow(self, suites: list[tuple[str, list[Action]]]) -> RunResult:
        """Generate every suite, run them once and render the report."""
        logger.info("Starting UI testing workflow")
        for name, actions in suites:
            self.build_test_suite(name, actions)
        result = self.run_tests()
        self.generate_report(result)
        return result


class PlaywrightTestingAgent(ActionFactory):
    """Direct-driving agent: runs Actions in a live Playwright browser.

    Usage:
        agent = PlaywrightTestingAgent(config)
        results = ResultAccumulator()
        await agent.initialize()
        try:
            await agent.run_actions([...], results)
        finally:
            await agent.close(results)
        agent.generate_report(results)
    """

    def __init__(self, config: AgentConfig, record_video: bool = True):
        self.config = config
        self.output_dir = Path(config.output_dir)
        self.screenshots_dir = self.output_dir / "screenshots"
        self.videos_dir = self.output_dir / "videos"
        self.record_video = record_video
        self._playwright = None
        self._browser = None
        self._context = None
        self.adapter: PlaywrightAdapter | None = None

    async def initialize(self) -> None:
        ensure_dir(self.output_dir)
        self._playwright, self._browser, self._context, self.adapter = await create_playwright_context(
            self.config.base_url,
            headless=self.config.headless,
            video_dir=self.videos_dir if self.record_video else None,
        )
        logger.info("Testing agent initialized")

    def _require_adapter(self) -> PlaywrightAdapter:
        if self.adapter is None:
            raise RuntimeError("Agent not initialized; call initialize() first")
        return self.adapter

    async def run_actions(
        self, actions: list[Action], accumulator: ResultAccumulator | None = None
    ) -> ResultAccumulator:
        driver = PlaywrightDriver(self._require_adapter(), self.screenshots_dir)
        return await driver.execute(actions, accumulator)

    async def run_accessibility_check(self) -> dict:
        return await run_accessibility_check(self._require_adapter(), self.output_dir)

    def generate_report(self, accumulator: ResultAccumulator) -> tuple[Path, Path]:
        renderer = ReportRenderer(self.output_dir)
        return renderer.render_results(
            accumulator.results, screenshots=accumulator.screenshots, videos=accumulator.videos
        )

    async def close(self, accumulator: ResultAccumulator | None = None) -> None:
        """Close the browser; the page video (if any) is recorded on ``accumulator``."""
        video = None
        if self.adapter is not None and self.record_video:
            await self.adapter.page.close()
            video = await self.adapter.video_path()
        if self._context is not None:
            await self._context.close()
        if self._browser is not None:
            await self._browser.close()
        if self._playwright is not None:
            await self._playwright.stop()
        if accumulator is not None:
            accumulator.add_video(video)
        self.adapter = None
        logger.info("Testing agent closed")
