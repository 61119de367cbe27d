"""Tests for the UI testing agents."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ui_test_agent.agent import PlaywrightTestingAgent, UITestingAgent
from ui_test_agent.core import AgentConfig, RunResult, UnsupportedAssertionKind
from ui_test_agent.runner import RunOptions
from ui_test_agent.runner.cypress_engine import RESULT_MARKER
from ui_test_agent.runtime import ResultAccumulator


@pytest.fixture
def config(tmp_path):
    return AgentConfig(
        base_url="https://example.com",
        root_dir=tmp_path / "cypress",
        output_dir=tmp_path / "cypress" / "results",
        config_file=tmp_path / "cypress.config.js",
        routes=["/", "/about-us"],
    )


@pytest.fixture
def engine(cypress_payload):
    engine = MagicMock()
    engine.run.return_value = RunResult.from_engine(cypress_payload)
    return engine


@pytest.fixture
def agent(config, engine):
    agent = UITestingAgent(config, engine=engine)
    agent.initialize()
    return agent


def test_initialize_writes_layout_and_config(agent, tmp_path):
    assert (tmp_path / "cypress" / "e2e").is_dir()
    assert (tmp_path / "cypress" / "screenshots").is_dir()
    assert (tmp_path / "cypress" / "videos").is_dir()

    content = (tmp_path / "cypress.config.js").read_text()
    assert "baseUrl: 'https://example.com'" in content
    assert "specPattern: 'cypress/e2e/**/*.cy.js'" in content
    assert "mochaFile: 'cypress/results/results-[hash].xml'" in content


def test_initialize_keeps_existing_config(config, engine):
    config.config_file.write_text("module.exports = {}\n")
    UITestingAgent(config, engine=engine).initialize()
    assert config.config_file.read_text() == "module.exports = {}\n"


def test_end_to_end_workflow(agent, engine, tmp_path):
    spec = agent.build_test_suite(
        "Example Test",
        [
            agent.navigate_to("/"),
            agent.test_element("h1", "text", "Example Domain"),
            agent.capture_screenshot("homepage"),
        ],
    )

    assert spec == tmp_path / "cypress" / "e2e" / "example_test.cy.js"
    content = spec.read_text()
    assert "describe('Example Test'" in content
    assert "cy.visit('/')" in content
    assert "cy.get('h1').should('have.text', 'Example Domain')" in content
    assert "cy.screenshot('homepage')" in content

    result = agent.run_tests()
    engine.run.assert_called_once_with([spec], RunOptions(browser="chrome", headless=False))

    json_path, html_path = agent.generate_report(result)
    assert json_path == tmp_path / "cypress" / "results" / "report.json"
    assert json.loads(json_path.read_text())["totalPassed"] == 1
    html = html_path.read_text()
    assert "Pass Rate: 100%" in html
    assert "Failed: <span class=\"failed\">0</span>" in html


def test_build_test_suite_unsupported_kind_writes_nothing(agent, tmp_path):
    with pytest.raises(UnsupportedAssertionKind):
        agent.build_test_suite("Broken", [agent.test_element("h1", "wobbles")])

    assert not (tmp_path / "cypress" / "e2e" / "broken.cy.js").exists()
    assert agent.spec_files == []


def test_rebuilding_a_suite_does_not_duplicate_spec(agent):
    actions = [agent.navigate_to("/")]
    agent.build_test_suite("Example Test", actions)
    agent.build_test_suite("Example Test", actions)
    assert len(agent.spec_files) == 1


def test_generate_accessibility_test(agent, tmp_path):
    spec = agent.generate_accessibility_test("Example Test", "/pricing")

    assert spec.name == "example_test_a11y.cy.js"
    content = spec.read_text()
    assert "describe('Example Test Accessibility'" in content
    assert "cy.visit('/pricing')" in content
    assert "cy.checkA11y()" in content
    assert "import 'cypress-axe'" in (tmp_path / "cypress" / "support" / "e2e.js").read_text()


def test_generate_route_tests(agent):
    paths = agent.generate_route_tests()

    assert [p.name for p in paths] == ["home_spec.cy.js", "about_us_spec.cy.js"]
    assert agent.spec_files == paths
    assert "checkA11y" in paths[0].read_text()


def test_generate_route_tests_without_a11y(agent):
    paths = agent.generate_route_tests(accessibility=False)
    assert "checkA11y" not in paths[0].read_text()


def test_run_workflow(config, engine):
    agent = UITestingAgent(config, engine=engine)
    agent.initialize()
    result = agent.run_workflow([("Example Test", [agent.navigate_to("/")])])

    assert result.total_passed == 1
    assert (config.output_dir / "report.html").exists()


def test_generate_screenshot_report(agent, tmp_path):
    shots = tmp_path / "cypress" / "screenshots" / "home_spec.cy.js"
    shots.mkdir(parents=True)
    (shots / "home-desktop-initial.png").write_bytes(b"png")

    path = agent.generate_screenshot_report()

    assert path == tmp_path / "cypress" / "reports" / "ui-test-report.html"
    assert "Viewports tested: 3" in path.read_text()


@pytest.fixture
def playwright_mocks():
    adapter = AsyncMock()
    adapter.text_content = AsyncMock(return_value="Example Domain")
    adapter.screenshot = AsyncMock(side_effect=lambda path: str(path))
    adapter.video_path = AsyncMock(return_value="videos/page.webm")
    playwright, browser, context = AsyncMock(), AsyncMock(), AsyncMock()
    return playwright, browser, context, adapter


@pytest.mark.asyncio
async def test_playwright_agent_lifecycle(config, playwright_mocks, example_actions):
    playwright, browser, context, adapter = playwright_mocks

    with patch("ui_test_agent.agent.create_playwright_context", AsyncMock(return_value=playwright_mocks)):
        agent = PlaywrightTestingAgent(config)
        results = ResultAccumulator()
        await agent.initialize()
        await agent.run_actions(example_actions, results)
        await agent.close(results)

    adapter.navigate.assert_awaited_once_with("/")
    adapter.page.close.assert_awaited_once()
    context.close.assert_awaited_once()
    browser.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()
    assert results.passed == 1
    assert results.videos == ["videos/page.webm"]

    json_path, html_path = agent.generate_report(results)
    assert json.loads(json_path.read_text())[0]["actual"] == "Example Domain"
    assert 'href="./videos/page.webm"' in html_path.read_text()


@pytest.mark.asyncio
async def test_playwright_agent_requires_initialize(config):
    agent = PlaywrightTestingAgent(config)
    with pytest.raises(RuntimeError):
        await agent.run_actions([])


def test_run_tests_with_config_in_subdirectory(tmp_path, monkeypatch, cypress_payload):
    monkeypatch.chdir(tmp_path)
    config = AgentConfig(
        config_file=Path("site/cypress.config.js"),
        root_dir=Path("site/cypress"),
        output_dir=Path("site/cypress/results"),
    )
    agent = UITestingAgent(config)
    agent.initialize()
    agent.build_test_suite("Example", [agent.navigate_to("/")])

    stdout = RESULT_MARKER + json.dumps(cypress_payload) + "\n"
    proc = MagicMock(stdout=stdout, stderr="", returncode=0)
    with patch("ui_test_agent.runner.cypress_engine.subprocess.run", return_value=proc) as run:
        agent.run_tests()

    kwargs = run.call_args.kwargs
    payload = json.loads(kwargs["input"])
    cwd = Path(kwargs["cwd"])
    for spec in payload["spec"]:
        assert (cwd / spec).exists()
    assert (cwd / payload["project"]).resolve() == (tmp_path / "site").resolve()
