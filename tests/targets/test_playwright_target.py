"""Tests for the Playwright dialect."""

import pytest

from ui_test_agent.core import AssertionKind
from ui_test_agent.targets import PlaywrightTarget


@pytest.fixture
def target():
    return PlaywrightTarget()


@pytest.mark.parametrize(
    "kind,expected,statement",
    [
        (AssertionKind.EXISTS, None, "expect(page.locator('h1').first).to_be_attached()"),
        (AssertionKind.TEXT, "Hi", "expect(page.locator('h1')).to_have_text('Hi')"),
        (AssertionKind.ATTRIBUTE, "id=main", "expect(page.locator('h1')).to_have_attribute('id', 'main')"),
        (AssertionKind.CLICKABLE, None, "page.locator('h1').first.click()"),
        (AssertionKind.VISIBLE, None, "expect(page.locator('h1').first).to_be_visible()"),
        (AssertionKind.COUNT, "1", "expect(page.locator('h1')).to_have_count(1)"),
        (AssertionKind.CONTAINS_TEXT, "H", "expect(page.locator('h1')).to_contain_text('H')"),
        (AssertionKind.CSS_PROPERTY, "color=red", "expect(page.locator('h1')).to_have_css('color', 'red')"),
    ],
)
def test_assertions(target, kind, expected, statement):
    assert target.assertion("h1", kind, expected) == statement


def test_form_primitives(target):
    assert target.check("#a", True) == "page.locator('#a').check()"
    assert target.select("#country select", "US") == "page.locator('#country select').select_option('US')"
    assert target.type_text("#n", "Alice") == "page.locator('#n').fill('Alice')"
    assert target.wait(10) == "page.wait_for_timeout(10)"
