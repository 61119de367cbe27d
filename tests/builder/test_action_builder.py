"""Tests for the Action Builder."""

import pytest

from ui_test_agent.builder import ActionBuilder, FormFieldKind, classify_form_field
from ui_test_agent.core import (
    AssertElementAction,
    FillFormAction,
    InvalidActionError,
    NavigateAction,
    ScreenshotAction,
    UnsupportedAssertionKind,
    WaitAction,
)


class TestAssertionKinds:
    """Cypress statements for every assertion kind."""

    @pytest.mark.parametrize(
        "kind,expected,statement",
        [
            ("exists", None, "cy.get('a').should('exist')"),
            ("text", "Example Domain", "cy.get('a').should('have.text', 'Example Domain')"),
            (
                "attribute",
                "href=https://www.iana.org/domains/example",
                "cy.get('a').should('have.attr', 'href', 'https://www.iana.org/domains/example')",
            ),
            ("clickable", None, "cy.get('a').click()"),
            ("visible", None, "cy.get('a').should('be.visible')"),
            ("count", "3", "cy.get('a').should('have.length', 3)"),
            ("containsText", "Example", "cy.get('a').should('contain', 'Example')"),
            ("cssProperty", "color=rgb(0, 0, 0)", "cy.get('a').should('have.css', 'color', 'rgb(0, 0, 0)')"),
        ],
    )
    def test_kind(self, cypress_builder, kind, expected, statement):
        action = AssertElementAction(selector="a", kind=kind, expected=expected)
        compiled = cypress_builder.compile(action)
        assert [s.text for s in compiled] == [statement]

    @pytest.mark.parametrize("kind", ["exists", "text", "attribute", "count", "cssProperty"])
    def test_deterministic(self, cypress_builder, kind):
        """Compiling the same action twice yields identical text."""
        expected = {"text": "Hi", "attribute": "id=x", "count": "2", "cssProperty": "color=red"}.get(kind)
        action = AssertElementAction(selector="#main", kind=kind, expected=expected)
        assert cypress_builder.compile(action) == cypress_builder.compile(action)

    def test_text_is_not_trimmed(self, cypress_builder):
        action = AssertElementAction(selector="p", kind="text", expected="  padded ")
        assert cypress_builder.compile(action)[0].text == "cy.get('p').should('have.text', '  padded ')"

    def test_attribute_value_may_contain_equals(self, cypress_builder):
        action = AssertElementAction(selector="a", kind="attribute", expected="href=/search?q=1")
        assert cypress_builder.compile(action)[0].text == "cy.get('a').should('have.attr', 'href', '/search?q=1')"

    def test_quotes_are_escaped(self, cypress_builder):
        action = AssertElementAction(selector="h1", kind="text", expected="It's here")
        assert cypress_builder.compile(action)[0].text == "cy.get('h1').should('have.text', 'It\\'s here')"


class TestInvalidActions:
    def test_unsupported_kind(self, cypress_builder):
        action = AssertElementAction(selector="h1", kind="sparkles")
        with pytest.raises(UnsupportedAssertionKind) as exc:
            cypress_builder.compile(action)
        assert exc.value.kind == "sparkles"
        assert "sparkles" in str(exc.value)

    @pytest.mark.parametrize(
        "kind,expected",
        [
            ("attribute", "href"),
            ("attribute", None),
            ("cssProperty", "=red"),
            ("count", "three"),
            ("count", "²"),
            ("text", None),
        ],
    )
    def test_bad_expected_shape(self, cypress_builder, kind, expected):
        action = AssertElementAction(selector="a", kind=kind, expected=expected)
        with pytest.raises(InvalidActionError):
            cypress_builder.compile(action)

    def test_compile_all_stops_on_first_error(self, cypress_builder):
        actions = [NavigateAction(url="/"), AssertElementAction(selector="h1", kind="bogus")]
        with pytest.raises(UnsupportedAssertionKind):
            cypress_builder.compile_all(actions)

    def test_compile_all_keep_going(self, cypress_builder):
        actions = [
            NavigateAction(url="/"),
            AssertElementAction(selector="h1", kind="bogus"),
            ScreenshotAction(name="after"),
        ]
        result = cypress_builder.compile_all(actions, stop_on_error=False)
        assert not result.ok
        assert len(result.errors) == 1
        assert [s.text for s in result.statements] == ["cy.visit('/')", "cy.screenshot('after')"]
        assert [s.action_index for s in result.statements] == [0, 2]


class TestFormFill:
    def test_classify_form_field(self):
        assert classify_form_field("#subscribe", True) == FormFieldKind.CHECKBOX
        assert classify_form_field("#subscribe", False) == FormFieldKind.CHECKBOX
        assert classify_form_field("#country select", "US") == FormFieldKind.SELECT
        assert classify_form_field("#name", "Alice") == FormFieldKind.TEXT

    def test_fill_form_statements(self, cypress_builder):
        action = FillFormAction(fields={"#subscribe": True, "#country select": "US", "#name": "Alice"})
        compiled = cypress_builder.compile(action, index=4)
        assert [s.text for s in compiled] == [
            "cy.get('#subscribe').check()",
            "cy.get('#country select').select('US')",
            "cy.get('#name').clear().type('Alice')",
        ]
        assert all(s.action_index == 4 for s in compiled)
        assert all(s.action_type == "fill_form" for s in compiled)

    def test_uncheck(self, cypress_builder):
        compiled = cypress_builder.compile(FillFormAction(fields={"#terms": False}))
        assert compiled[0].text == "cy.get('#terms').uncheck()"


class TestBuild:
    def test_example_scenario(self, cypress_builder, example_actions):
        descriptor = cypress_builder.build("Example Test", example_actions)
        assert descriptor.name == "Example Test"
        assert descriptor.lines == [
            "cy.visit('/')",
            "cy.get('h1').should('have.text', 'Example Domain')",
            "cy.screenshot('homepage')",
        ]
        assert [s.action_index for s in descriptor.statements] == [0, 1, 2]

    def test_wait(self, cypress_builder):
        assert cypress_builder.compile(WaitAction(duration_ms=1500))[0].text == "cy.wait(1500)"

    def test_playwright_dialect(self, playwright_builder, example_actions):
        descriptor = playwright_builder.build("Example", example_actions)
        assert descriptor.lines == [
            "page.goto('/')",
            "expect(page.locator('h1')).to_have_text('Example Domain')",
            "page.screenshot(path='homepage.png', full_page=True)",
        ]

    def test_builder_has_no_state(self, example_actions):
        from ui_test_agent.targets import CypressTarget

        first = ActionBuilder(CypressTarget()).build("A", example_actions)
        second = ActionBuilder(CypressTarget()).build("A", example_actions)
        assert first == second
