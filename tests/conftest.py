"""Pytest configuration and fixtures."""

import pytest

from ui_test_agent.builder import ActionBuilder
from ui_test_agent.core.models import AssertElementAction, NavigateAction, ScreenshotAction
from ui_test_agent.targets import CypressTarget, PlaywrightTarget


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    monkeypatch.setenv("CI", "true")
    monkeypatch.setenv("UITEST_BROWSER", "firefox")
    monkeypatch.setenv("UITEST_BASE_URL", "https://example.com")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("CI", "UITEST_BROWSER", "UITEST_BASE_URL", "UITEST_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cypress_builder():
    return ActionBuilder(CypressTarget())


@pytest.fixture
def playwright_builder():
    return ActionBuilder(PlaywrightTarget())


@pytest.fixture
def example_actions():
    return [
        NavigateAction(url="/"),
        AssertElementAction(selector="h1", kind="text", expected="Example Domain"),
        ScreenshotAction(name="homepage"),
    ]


@pytest.fixture
def cypress_payload():
    """A trimmed Cypress module API result for one passing spec."""
    return {
        "status": "finished",
        "totalTests": 1,
        "totalPassed": 1,
        "totalFailed": 0,
        "totalDuration": 1530,
        "browserName": "chrome",
        "runs": [
            {
                "spec": {"name": "example_test.cy.js", "relative": "cypress/e2e/example_test.cy.js"},
                "stats": {"tests": 1, "passes": 1, "failures": 0, "pending": 0, "skipped": 0, "duration": 1530},
                "video": "/project/cypress/videos/example_test.cy.js.mp4",
                "screenshots": [
                    {"name": "homepage", "path": "/project/cypress/screenshots/example_test.cy.js/homepage.png"}
                ],
            }
        ],
    }
