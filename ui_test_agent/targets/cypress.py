"""Cypress dialect: compiled actions become ``cy.*`` commands in ``.cy.js`` specs."""

import json
import re

from ui_test_agent.core.models import AssertionKind, TestSuiteDescriptor, Viewport
from ui_test_agent.templating import render

from .base import ScriptTarget, split_pair


class CypressTarget(ScriptTarget):
    """Generates Cypress spec files."""

    name = "cypress"
    file_suffix = ".cy.js"
    accessibility_suffix = "_a11y.cy.js"
    route_suffix = "_spec.cy.js"
    case_name = "performs UI testing"

    def _get(self, selector: str) -> str:
        return f"cy.get({self.quote(selector)})"

    def navigate(self, url: str) -> str:
        # Relative URLs resolve against baseUrl in cypress.config.js.
        return f"cy.visit({self.quote(url)})"

    def assertion(self, selector: str, kind: AssertionKind, expected: str | None) -> str:
        q = self.quote
        get = self._get(selector)

        if kind == AssertionKind.EXISTS:
            return f"{get}.should('exist')"
        if kind == AssertionKind.TEXT:
            return f"{get}.should('have.text', {q(expected)})"
        if kind == AssertionKind.ATTRIBUTE:
            attr_name, attr_value = split_pair(expected)
            return f"{get}.should('have.attr', {q(attr_name)}, {q(attr_value)})"
        if kind == AssertionKind.CLICKABLE:
            return f"{get}.click()"
        if kind == AssertionKind.VISIBLE:
            return f"{get}.should('be.visible')"
        if kind == AssertionKind.COUNT:
            return f"{get}.should('have.length', {int(expected)})"
        if kind == AssertionKind.CONTAINS_TEXT:
            return f"{get}.should('contain', {q(expected)})"
        if kind == AssertionKind.CSS_PROPERTY:
            prop, value = split_pair(expected)
            return f"{get}.should('have.css', {q(prop)}, {q(value)})"
        raise ValueError(f"Unhandled assertion kind: {kind}")

    def check(self, selector: str, checked: bool) -> str:
        return f"{self._get(selector)}.{'check' if checked else 'uncheck'}()"

    def select(self, selector: str, value: str) -> str:
        return f"{self._get(selector)}.select({self.quote(value)})"

    def type_text(self, selector: str, value: str) -> str:
        return f"{self._get(selector)}.clear().type({self.quote(value)})"

    def screenshot(self, name: str) -> str:
        return f"cy.screenshot({self.quote(name)})"

    def wait(self, duration_ms: int) -> str:
        return f"cy.wait({int(duration_ms)})"

    def render_suite(self, descriptor: TestSuiteDescriptor) -> str:
        return render(
            "suite.cy.js",
            name=descriptor.name,
            case_name=self.case_name,
            lines=descriptor.lines,
        )

    def render_accessibility_suite(self, name: str, path: str = "/") -> str:
        """Spec that loads ``path`` and runs cypress-axe against it."""
        return render("accessibility_suite.cy.js", name=name, path=path)

    @staticmethod
    def route_name(route: str) -> str:
        """``/`` is ``home``; otherwise separators become underscores.

        Hyphens are replaced too: screenshot names are split on ``-`` to
        recover route and viewport.
        """
        if route in ("", "/"):
            return "home"
        return re.sub(r"[^A-Za-z0-9_]", "_", route.strip("/")) or "home"

    def route_spec_file_name(self, route: str) -> str:
        return f"{self.route_name(route)}{self.route_suffix}"

    def render_route_suite(
        self,
        route: str,
        base_url: str,
        viewports: list[Viewport],
        selectors: dict[str, str],
        accessibility: bool = True,
        fill_text: str = "Test input",
        settle_ms: int = 1000,
        click_settle_ms: int = 500,
    ) -> str:
        """Route/viewport exploration spec: load check, clickables and form walk."""
        viewports_json = json.dumps([v.model_dump() for v in viewports])
        return render(
            "route_suite.cy.js",
            route=route,
            route_name=self.route_name(route),
            base_url=base_url.rstrip("/"),
            viewports_json=viewports_json,
            selectors=selectors,
            accessibility=accessibility,
            fill_text=fill_text,
            settle_ms=settle_ms,
            click_settle_ms=click_settle_ms,
        )

    def render_config(
        self,
        base_url: str,
        output_dir: str,
        spec_pattern: str = "cypress/e2e/**/*.cy.js",
        screenshots_dir: str = "cypress/screenshots",
        videos_dir: str = "cypress/videos",
    ) -> str:
        """Content of ``cypress.config.js``."""
        return render(
            "cypress.config.js",
            base_url=base_url,
            output_dir=output_dir,
            spec_pattern=spec_pattern,
            screenshots_dir=screenshots_dir,
            videos_dir=videos_dir,
        )

    def render_support_file(self) -> str:
        """Content of ``cypress/support/e2e.js`` registering cypress-axe."""
        return render("support_e2e.js")
