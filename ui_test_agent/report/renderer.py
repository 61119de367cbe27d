"""
Report Renderer.

Turns a result set into ``report.json`` (the raw structure) and
``report.html`` (summary block, results table, artifact links). Two result
shapes are accepted: a flat list of per-assertion TestResults from direct
driving, or an engine RunResult with per-spec summaries.
"""

import json
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from ui_test_agent.artifacts import ensure_dir, write_text
from ui_test_agent.core.models import RunResult, TestResult
from ui_test_agent.templating import render

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["Selector", "Test Type", "Expected", "Actual", "Status", "Timestamp"]
RUN_COLUMNS = ["Spec File", "Tests", "Passes", "Failures", "Duration"]


@dataclass(frozen=True)
class ReportSummary:
    """Aggregate counts of one run."""

    total: int
    passed: int
    failed: int

    @property
    def pass_rate(self) -> int:
        """Pass percentage rounded half-up; 0 for an empty run."""
        if self.total == 0:
            return 0
        return math.floor(self.passed * 100 / self.total + 0.5)

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "pass_rate": self.pass_rate,
        }


def summarize_results(results: Iterable[TestResult]) -> ReportSummary:
    results = list(results)
    passed = sum(1 for r in results if r.passed)
    return ReportSummary(total=len(results), passed=passed, failed=len(results) - passed)


def summarize_run(run: RunResult) -> ReportSummary:
    """Use the engine's totals, falling back to summing per-spec stats."""
    total = run.total_tests if run.total_tests is not None else sum(r.stats.tests for r in run.runs)
    passed = run.total_passed if run.total_passed is not None else sum(r.stats.passes for r in run.runs)
    failed = run.total_failed if run.total_failed is not None else sum(r.stats.failures for r in run.runs)
    return ReportSummary(total=total, passed=passed, failed=failed)


def summarize_report_json(data: Any) -> ReportSummary:
    """Recompute the summary from a parsed ``report.json`` of either shape."""
    if isinstance(data, list):
        return summarize_results(TestResult.model_validate(item) for item in data)
    if isinstance(data, dict):
        return summarize_run(RunResult.model_validate(data))
    raise ValueError(f"Unrecognized report structure: {type(data).__name__}")


def load_report(path: Path) -> tuple[Any, ReportSummary]:
    """Read a ``report.json`` back and summarize it."""
    with open(path) as f:
        data = json.load(f)
    return data, summarize_report_json(data)


def _format_duration(duration_ms: int) -> str:
    return f"{duration_ms / 1000:g}s"


class ReportRenderer:
    """Writes report.json and report.html into ``output_dir``."""

    json_name = "report.json"
    html_name = "report.html"

    def __init__(self, output_dir: str | Path, title: str = "UI Test Results"):
        self.output_dir = Path(output_dir)
        self.title = title

    def render_html(
        self,
        summary: ReportSummary,
        columns: list[str],
        rows: list[dict[str, Any]],
        videos: list[dict[str, str]],
        screenshots: list[dict[str, str]],
    ) -> str:
        return render(
            "report.html",
            title=self.title,
            summary=summary,
            columns=columns,
            rows=rows,
            videos=videos,
            screenshots=screenshots,
            generated_at=datetime.now().isoformat(timespec="seconds"),
        )

    def _write(self, raw: Any, html: str) -> tuple[Path, Path]:
        ensure_dir(self.output_dir)
        json_path = write_text(self.output_dir / self.json_name, json.dumps(raw, indent=2))
        logger.info(f"📄 JSON report saved: {json_path}")
        html_path = write_text(self.output_dir / self.html_name, html)
        logger.info(f"📄 Report generated at {html_path}")
        return json_path, html_path

    def render_results(
        self,
        results: list[TestResult],
        screenshots: Iterable[str] = (),
        videos: Iterable[str] = (),
    ) -> tuple[Path, Path]:
        """Render per-assertion results from direct driving."""
        summary = summarize_results(results)
        rows = [
            {
                "failed": not r.passed,
                "cells": [
                    r.selector,
                    r.kind,
                    r.expected if r.expected is not None else "N/A",
                    r.error if r.error is not None else (r.actual if r.actual is not None else "N/A"),
                    "PASS" if r.passed else "FAIL",
                    r.timestamp,
                ],
            }
            for r in results
        ]

        screenshot_links = [{"path": p, "label": Path(p).stem} for p in screenshots if p]
        screenshot_links += [
            {"path": r.screenshot, "label": f"{r.selector} ({r.kind})"} for r in results if r.screenshot
        ]
        video_links = [{"path": p, "label": Path(p).name} for p in videos if p]
        video_links += [{"path": r.video, "label": f"{r.selector} Video"} for r in results if r.video]

        html = self.render_html(summary, RESULT_COLUMNS, rows, video_links, screenshot_links)
        raw = [r.model_dump(mode="json") for r in results]
        return self._write(raw, html)

    def render_run(self, run: RunResult) -> tuple[Path, Path]:
        """Render an engine run's per-spec summaries."""
        summary = summarize_run(run)
        rows = [
            {
                "failed": spec_run.stats.failures > 0,
                "cells": [
                    spec_run.spec.name,
                    spec_run.stats.tests,
                    spec_run.stats.passes,
                    spec_run.stats.failures,
                    _format_duration(spec_run.stats.duration_ms),
                ],
            }
            for spec_run in run.runs
        ]

        video_links = [
            {"path": spec_run.video, "label": f"{spec_run.spec.name} Video"}
            for spec_run in run.runs
            if spec_run.video
        ]
        screenshot_links = [
            {"path": shot.path, "label": shot.name or Path(shot.path).stem}
            for spec_run in run.runs
            for shot in spec_run.screenshots
            if shot.path
        ]

        html = self.render_html(summary, RUN_COLUMNS, rows, video_links, screenshot_links)
        raw = run.raw or run.model_dump(mode="json", by_alias=True)
        return self._write(raw, html)

    def summary_line(self, summary: ReportSummary) -> str:
        return f"{summary.passed}/{summary.total} passed, {summary.failed} failed ({summary.pass_rate}%)"
