"""
Artifact Manager for the UI test agent.

Owns the on-disk layout (spec files, screenshots, videos, results, reports).
Directories are created on demand and never deleted or cleaned.
"""

import logging
from pathlib import Path

from ui_test_agent.core.exceptions import FileSystemFailure

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if missing. Idempotent."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemFailure(str(path), e.strerror or str(e)) from e
    return path


def write_text(path: Path, content: str) -> Path:
    """Write ``content`` to ``path``, creating the parent directory first."""
    path = Path(path)
    ensure_dir(path.parent)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileSystemFailure(str(path), e.strerror or str(e)) from e
    return path


class ArtifactManager:
    """
    Manages the directory layout of a test project.

    Layout under ``root`` (Cypress conventions)::

        e2e/          generated spec files
        support/      support files (cypress-axe registration)
        screenshots/
        videos/
        reports/      route/viewport screenshot report

    ``results_dir`` holds report.json / report.html and may live elsewhere.
    """

    def __init__(self, root: str | Path = "./cypress", results_dir: str | Path | None = None):
        self.root = Path(root)
        self.results_dir = Path(results_dir) if results_dir else self.root / "results"

    @property
    def specs_dir(self) -> Path:
        return self.root / "e2e"

    @property
    def support_dir(self) -> Path:
        return self.root / "support"

    @property
    def screenshots_dir(self) -> Path:
        return self.root / "screenshots"

    @property
    def videos_dir(self) -> Path:
        return self.root / "videos"

    @property
    def reports_dir(self) -> Path:
        return self.root / "reports"

    def ensure_layout(self) -> None:
        """Create every directory of the layout."""
        for directory in (
            self.specs_dir,
            self.screenshots_dir,
            self.videos_dir,
            self.results_dir,
        ):
            ensure_dir(directory)
        logger.info(f"📁 Ensured artifact layout under {self.root}")

    def screenshot_path(self, name: str) -> Path:
        return self.screenshots_dir / f"{name}.png"
