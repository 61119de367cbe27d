"""Playwright dialect.

This target drives the browser directly (see ``runtime.driver``); the
statements it renders are Playwright-for-Python calls recorded on each
TestResult so a failing row shows exactly what was attempted.
"""

from ui_test_agent.core.models import AssertionKind

from .base import Target, TargetCapability, split_pair


class PlaywrightTarget(Target):
    """Direct-driving Playwright target."""

    name = "playwright"
    capabilities = frozenset({TargetCapability.DRIVES_DIRECTLY})

    def _locator(self, selector: str) -> str:
        return f"page.locator({self.quote(selector)})"

    def navigate(self, url: str) -> str:
        return f"page.goto({self.quote(url)})"

    def assertion(self, selector: str, kind: AssertionKind, expected: str | None) -> str:
        q = self.quote
        loc = self._locator(selector)

        if kind == AssertionKind.EXISTS:
            return f"expect({loc}.first).to_be_attached()"
        if kind == AssertionKind.TEXT:
            return f"expect({loc}).to_have_text({q(expected)})"
        if kind == AssertionKind.ATTRIBUTE:
            attr_name, attr_value = split_pair(expected)
            return f"expect({loc}).to_have_attribute({q(attr_name)}, {q(attr_value)})"
        if kind == AssertionKind.CLICKABLE:
            return f"{loc}.first.click()"
        if kind == AssertionKind.VISIBLE:
            return f"expect({loc}.first).to_be_visible()"
        if kind == AssertionKind.COUNT:
            return f"expect({loc}).to_have_count({int(expected)})"
        if kind == AssertionKind.CONTAINS_TEXT:
            return f"expect({loc}).to_contain_text({q(expected)})"
        if kind == AssertionKind.CSS_PROPERTY:
            prop, value = split_pair(expected)
            return f"expect({loc}).to_have_css({q(prop)}, {q(value)})"
        raise ValueError(f"Unhandled assertion kind: {kind}")

    def check(self, selector: str, checked: bool) -> str:
        return f"{self._locator(selector)}.{'check' if checked else 'uncheck'}()"

    def select(self, selector: str, value: str) -> str:
        return f"{self._locator(selector)}.select_option({self.quote(value)})"

    def type_text(self, selector: str, value: str) -> str:
        # fill() clears the field before typing.
        return f"{self._locator(selector)}.fill({self.quote(value)})"

    def screenshot(self, name: str) -> str:
        return f"page.screenshot(path={self.quote(name + '.png')}, full_page=True)"

    def wait(self, duration_ms: int) -> str:
        return f"page.wait_for_timeout({int(duration_ms)})"
