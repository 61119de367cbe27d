"""Report rendering."""

from ui_test_agent.report.renderer import (
    ReportRenderer,
    ReportSummary,
    load_report,
    summarize_report_json,
    summarize_results,
    summarize_run,
)
from ui_test_agent.report.screenshots import (
    collect_screenshots,
    group_counts,
    group_screenshots,
    render_screenshot_report,
)

__all__ = [
    "ReportRenderer",
    "ReportSummary",
    "load_report",
    "summarize_report_json",
    "summarize_results",
    "summarize_run",
    "collect_screenshots",
    "group_counts",
    "group_screenshots",
    "render_screenshot_report",
]
