"""Cypress engine invocation.

Cypress only exposes a structured result through its Node module API
(``require('cypress').run``), so the engine is driven through a short
``node`` program: options go in on stdin as JSON, the result comes back on
stdout on a marker-prefixed line. The call blocks until Cypress returns.
"""

import json
import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ui_test_agent.core.config import ci_enabled
from ui_test_agent.core.exceptions import RunnerInvocationFailed
from ui_test_agent.core.models import RunResult

logger = logging.getLogger(__name__)

RESULT_MARKER = "__UI_TEST_AGENT_RESULT__"

NODE_RUNNER = f"""
const cypress = require('cypress');
let input = '';
process.stdin.on('data', chunk => {{ input += chunk; }});
process.stdin.on('end', () => {{
  cypress.run(JSON.parse(input))
    .then(results => {{
      process.stdout.write('\\n{RESULT_MARKER}' + JSON.stringify(results) + '\\n');
    }})
    .catch(err => {{
      console.error(err && err.message ? err.message : String(err));
      process.exit(1);
    }});
}});
"""


@dataclass
class RunOptions:
    """Options passed to the engine."""

    browser: str = "chrome"
    headless: bool = False

    @classmethod
    def from_env(cls, browser: str | None = None) -> "RunOptions":
        """Headless follows the CI indicator; browser falls back to UITEST_BROWSER."""
        return cls(
            browser=browser or os.environ.get("UITEST_BROWSER", "chrome"),
            headless=ci_enabled(),
        )


class Engine(Protocol):
    """External automation engine boundary."""

    def run(self, spec_files: list[Path], options: RunOptions) -> RunResult:
        ...


class CypressEngine:
    """Runs Cypress specs and returns the module API's structured result."""

    name = "cypress"

    def __init__(self, project_dir: str | Path = ".", node_bin: str = "node", timeout: float | None = None):
        self.project_dir = Path(project_dir)
        self.node_bin = node_bin
        self.timeout = timeout

    def build_payload(self, spec_files: list[Path], options: RunOptions) -> dict:
        """Request for the node runner; paths are absolute since it runs in ``project_dir``."""
        return {
            "spec": [str(Path(p).resolve()) for p in spec_files],
            "browser": options.browser,
            "headless": options.headless,
            "project": str(self.project_dir.resolve()),
        }

    def run(self, spec_files: list[Path], options: RunOptions) -> RunResult:
        """Run ``spec_files`` and block until Cypress finishes.

        Raises:
            RunnerInvocationFailed: the engine could not start, exited
                non-zero, or reported a failed run status
        """
        if not spec_files:
            raise RunnerInvocationFailed("No spec files to run", engine=self.name)

        payload = self.build_payload(spec_files, options)
        logger.info(
            f"🚀 Running {len(spec_files)} Cypress spec(s) "
            f"(browser={options.browser}, headless={options.headless})"
        )

        try:
            proc = subprocess.run(
                [self.node_bin, "-e", NODE_RUNNER],
                input=json.dumps(payload),
                capture_output=True,
                text=True,
                cwd=self.project_dir,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise RunnerInvocationFailed(f"Could not start '{self.node_bin}': {e}", engine=self.name) from e
        except subprocess.TimeoutExpired as e:
            raise RunnerInvocationFailed(f"Cypress did not finish within {self.timeout}s", engine=self.name) from e

        if proc.returncode != 0:
            message = (proc.stderr or proc.stdout or "").strip() or f"exit code {proc.returncode}"
            raise RunnerInvocationFailed(message, engine=self.name, exit_code=proc.returncode)

        return self.parse_output(proc.stdout)

    def parse_output(self, stdout: str) -> RunResult:
        """Extract the marker line from stdout and validate it."""
        result_lines = [line for line in stdout.splitlines() if line.startswith(RESULT_MARKER)]
        if not result_lines:
            raise RunnerInvocationFailed("Cypress returned no result payload", engine=self.name)

        try:
            payload = json.loads(result_lines[-1][len(RESULT_MARKER):])
        except json.JSONDecodeError as e:
            raise RunnerInvocationFailed(f"Unparsable Cypress result: {e}", engine=self.name) from e

        # The module API resolves with {status: 'failed', message} when the run could not start.
        if payload.get("status") == "failed":
            raise RunnerInvocationFailed(payload.get("message", "Cypress run failed"), engine=self.name)

        result = RunResult.from_engine(payload)
        logger.info(
            f"Cypress run complete: {result.total_passed}/{result.total_tests} passed, "
            f"{result.total_failed} failed"
        )
        return result
