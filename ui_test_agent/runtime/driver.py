"""Direct execution of Actions against a live page."""

import json
import logging
from pathlib import Path
from typing import Any

from ui_test_agent.artifacts import write_text
from ui_test_agent.builder.action_builder import (
    FormFieldKind,
    classify_form_field,
    resolve_kind,
    validate_expected,
)
from ui_test_agent.core.exceptions import UITestError
from ui_test_agent.core.models import (
    Action,
    AssertElementAction,
    AssertionKind,
    FillFormAction,
    NavigateAction,
    ScreenshotAction,
    TestResult,
    WaitAction,
)
from ui_test_agent.targets.base import split_pair
from ui_test_agent.targets.playwright import PlaywrightTarget

from .accumulator import ResultAccumulator
from .playwright_adapter import PlaywrightAdapter

logger = logging.getLogger(__name__)


class PlaywrightDriver:
    """Executes actions in order through a PlaywrightAdapter.

    Each assertion yields exactly one TestResult. A failing assertion is
    recorded (``passed=False``, ``error`` set, ``actual=None``) and execution
    moves on. Navigation, form and screenshot failures are not assertions;
    they propagate and end the run, leaving earlier results in the
    accumulator.
    """

    def __init__(
        self,
        adapter: PlaywrightAdapter,
        screenshots_dir: str | Path,
        target: PlaywrightTarget | None = None,
    ):
        self.adapter = adapter
        self.screenshots_dir = Path(screenshots_dir)
        self.target = target or PlaywrightTarget()

    async def execute(
        self, actions: list[Action], accumulator: ResultAccumulator | None = None
    ) -> ResultAccumulator:
        acc = accumulator if accumulator is not None else ResultAccumulator()

        for index, action in enumerate(actions):
            logger.debug(f"Executing action {index}: {action.type}")

            if isinstance(action, NavigateAction):
                await self.adapter.navigate(action.url)
            elif isinstance(action, AssertElementAction):
                result = acc.add(await self.check(action))
                if not result.passed:
                    logger.error(f"Test failed for {action.selector}: {result.error or result.actual}")
            elif isinstance(action, FillFormAction):
                await self.fill_form(action)
            elif isinstance(action, ScreenshotAction):
                path = self.screenshots_dir / f"{action.name}.png"
                acc.add_screenshot(await self.adapter.screenshot(path))
            elif isinstance(action, WaitAction):
                await self.adapter.wait(action.duration_ms)

        logger.info(f"Executed {len(actions)} actions: {acc.passed}/{len(acc)} assertions passed")
        return acc

    async def fill_form(self, action: FillFormAction) -> None:
        for selector, value in action.fields.items():
            field_kind = classify_form_field(selector, value)
            if field_kind == FormFieldKind.CHECKBOX:
                await self.adapter.set_checked(selector, value)
            elif field_kind == FormFieldKind.SELECT:
                await self.adapter.select_option(selector, str(value))
            else:
                await self.adapter.fill(selector, str(value))

    async def check(self, action: AssertElementAction) -> TestResult:
        """Run one assertion and describe its outcome."""
        statement = None
        try:
            kind = resolve_kind(action.kind, action.selector)
            validate_expected(kind, action.expected, action.selector)
            statement = self.target.assertion(action.selector, kind, action.expected)
            passed, actual = await self._evaluate(kind, action.selector, action.expected)
        except UITestError as e:
            return TestResult(
                selector=action.selector,
                kind=action.kind,
                expected=action.expected,
                actual=None,
                error=str(e),
                passed=False,
                statement=statement,
            )

        return TestResult(
            selector=action.selector,
            kind=action.kind,
            expected=action.expected,
            actual=actual,
            passed=passed,
            statement=statement,
        )

    async def _evaluate(self, kind: AssertionKind, selector: str, expected: str | None) -> tuple[bool, str | None]:
        a = self.adapter

        if kind == AssertionKind.EXISTS:
            count = await a.count(selector)
            return count > 0, str(count)
        if kind == AssertionKind.TEXT:
            actual = await a.text_content(selector)
            return actual == expected, actual
        if kind == AssertionKind.ATTRIBUTE:
            attr_name, attr_value = split_pair(expected)
            actual = await a.get_attribute(selector, attr_name)
            return actual == attr_value, actual
        if kind == AssertionKind.CLICKABLE:
            await a.click(selector)
            return True, None
        if kind == AssertionKind.VISIBLE:
            visible = await a.is_visible(selector)
            return visible, str(visible).lower()
        if kind == AssertionKind.COUNT:
            count = await a.count(selector)
            return count == int(expected.strip()), str(count)
        if kind == AssertionKind.CONTAINS_TEXT:
            actual = await a.text_content(selector)
            return expected in (actual or ""), actual
        if kind == AssertionKind.CSS_PROPERTY:
            prop, value = split_pair(expected)
            actual = await a.css_property(selector, prop)
            return actual == value, actual
        raise ValueError(f"Unhandled assertion kind: {kind}")


async def run_accessibility_check(adapter: PlaywrightAdapter, output_dir: str | Path) -> dict[str, Any]:
    """Run axe-core on the current page and save ``accessibility.json``."""
    results = await adapter.run_axe()
    path = write_text(Path(output_dir) / "accessibility.json", json.dumps(results, indent=2))
    violations = len(results.get("violations", [])) if isinstance(results, dict) else 0
    logger.info(f"📄 Accessibility results saved: {path} ({violations} violations)")
    return results
