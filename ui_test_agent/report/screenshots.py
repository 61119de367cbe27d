"""Route/viewport screenshot report.

Screenshot file names from route suites encode ``{route}-{viewport}-...``;
this module groups them back by route and viewport and renders
``ui-test-report.html``.
"""

import logging
import os
from datetime import datetime
from pathlib import Path

from ui_test_agent.artifacts import write_text
from ui_test_agent.templating import render

logger = logging.getLogger(__name__)

REPORT_NAME = "ui-test-report.html"

ScreenshotGroups = dict[str, dict[str, list[str]]]


def collect_screenshots(directory: str | Path) -> list[str]:
    """All ``.png`` files under ``directory``, recursively, sorted."""
    directory = Path(directory)
    if not directory.exists():
        logger.warning(f"Screenshots directory not found: {directory}")
        return []
    return sorted(str(p) for p in directory.rglob("*.png") if p.is_file())


def group_screenshots(paths: list[str]) -> ScreenshotGroups:
    """Group screenshot paths by route, then viewport.

    Names with fewer than two hyphen-separated segments are skipped.
    """
    groups: ScreenshotGroups = {}
    for path in paths:
        filename = os.path.basename(path.replace("\\", "/"))
        if filename.endswith(".png"):
            filename = filename[: -len(".png")]
        parts = filename.split("-")
        if len(parts) < 2:
            continue
        route, viewport = parts[0], parts[1]
        groups.setdefault(route, {}).setdefault(viewport, []).append(path)
    return groups


def group_counts(groups: ScreenshotGroups) -> dict[str, dict[str, int]]:
    return {
        route: {viewport: len(files) for viewport, files in viewports.items()}
        for route, viewports in groups.items()
    }


def render_screenshot_report(
    screenshots_dir: str | Path,
    reports_dir: str | Path,
    viewport_count: int,
) -> Path:
    """Write ``ui-test-report.html`` for the screenshots under ``screenshots_dir``."""
    logger.info("Generating test report...")
    reports_dir = Path(reports_dir)
    files = collect_screenshots(screenshots_dir)
    groups = group_screenshots(files)

    def src(path: str) -> str:
        return Path(os.path.relpath(path, reports_dir)).as_posix()

    html = render(
        "screenshot_report.html",
        groups=groups,
        viewport_count=viewport_count,
        total_screenshots=len(files),
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        src=src,
    )
    report_path = write_text(reports_dir / REPORT_NAME, html)
    logger.info(f"📄 Report generated at {report_path}")
    return report_path
