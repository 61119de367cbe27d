"""Tests for the Cypress engine boundary."""

import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ui_test_agent.core import RunnerInvocationFailed
from ui_test_agent.runner import CypressEngine, RunOptions
from ui_test_agent.runner.cypress_engine import RESULT_MARKER


def _completed(stdout="", stderr="", returncode=0):
    proc = MagicMock(spec=subprocess.CompletedProcess)
    proc.stdout = stdout
    proc.stderr = stderr
    proc.returncode = returncode
    return proc


class TestRunOptions:
    def test_from_env_ci(self, mock_env_vars):
        options = RunOptions.from_env()
        assert options.headless is True
        assert options.browser == "firefox"

    def test_from_env_local(self, clean_env):
        options = RunOptions.from_env()
        assert options.headless is False
        assert options.browser == "chrome"

    def test_ci_false_is_not_headless(self, monkeypatch):
        monkeypatch.setenv("CI", "false")
        assert RunOptions.from_env().headless is False


class TestCypressEngine:
    def test_successful_run(self, tmp_path, cypress_payload):
        engine = CypressEngine(project_dir=tmp_path)
        stdout = "Cypress banner\n" + RESULT_MARKER + json.dumps(cypress_payload) + "\n"

        with patch("ui_test_agent.runner.cypress_engine.subprocess.run", return_value=_completed(stdout)) as run:
            result = engine.run([Path("cypress/e2e/example_test.cy.js")], RunOptions(headless=True))

        assert result.total_tests == 1
        assert result.total_passed == 1
        assert result.total_failed == 0

        args, kwargs = run.call_args
        assert args[0][:2] == ["node", "-e"]
        payload = json.loads(kwargs["input"])
        assert payload["spec"] == [str(Path("cypress/e2e/example_test.cy.js").resolve())]
        assert payload["project"] == str(tmp_path.resolve())
        assert payload["browser"] == "chrome"
        assert payload["headless"] is True
        assert kwargs["cwd"] == tmp_path

    def test_non_zero_exit(self, tmp_path):
        engine = CypressEngine(project_dir=tmp_path)
        proc = _completed(stderr="Cannot find module 'cypress'", returncode=1)

        with patch("ui_test_agent.runner.cypress_engine.subprocess.run", return_value=proc):
            with pytest.raises(RunnerInvocationFailed) as exc:
                engine.run([Path("a.cy.js")], RunOptions())

        assert exc.value.engine_message == "Cannot find module 'cypress'"
        assert exc.value.exit_code == 1

    def test_failed_status_payload(self, tmp_path):
        engine = CypressEngine(project_dir=tmp_path)
        stdout = RESULT_MARKER + json.dumps({"status": "failed", "failures": 1, "message": "Browser not found"})

        with patch("ui_test_agent.runner.cypress_engine.subprocess.run", return_value=_completed(stdout)):
            with pytest.raises(RunnerInvocationFailed, match="Browser not found"):
                engine.run([Path("a.cy.js")], RunOptions())

    def test_missing_node(self, tmp_path):
        engine = CypressEngine(project_dir=tmp_path, node_bin="no-such-node")

        with patch("ui_test_agent.runner.cypress_engine.subprocess.run", side_effect=FileNotFoundError("no-such-node")):
            with pytest.raises(RunnerInvocationFailed, match="no-such-node"):
                engine.run([Path("a.cy.js")], RunOptions())

    def test_no_payload(self, tmp_path):
        engine = CypressEngine(project_dir=tmp_path)
        with patch("ui_test_agent.runner.cypress_engine.subprocess.run", return_value=_completed("just logs\n")):
            with pytest.raises(RunnerInvocationFailed, match="no result payload"):
                engine.run([Path("a.cy.js")], RunOptions())

    def test_empty_spec_list(self, tmp_path):
        engine = CypressEngine(project_dir=tmp_path)
        with patch("ui_test_agent.runner.cypress_engine.subprocess.run") as run:
            with pytest.raises(RunnerInvocationFailed):
                engine.run([], RunOptions())
        run.assert_not_called()

    def test_no_retry(self, tmp_path):
        engine = CypressEngine(project_dir=tmp_path)
        with patch(
            "ui_test_agent.runner.cypress_engine.subprocess.run", return_value=_completed(returncode=3)
        ) as run:
            with pytest.raises(RunnerInvocationFailed):
                engine.run([Path("a.cy.js")], RunOptions())
        assert run.call_count == 1
