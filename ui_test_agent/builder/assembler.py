"""Script Assembler: writes compiled suites to spec files."""

import logging
from pathlib import Path

from ui_test_agent.artifacts import ensure_dir, write_text
from ui_test_agent.core.models import TestSuiteDescriptor, Viewport
from ui_test_agent.targets.base import ScriptTarget
from ui_test_agent.targets.cypress import CypressTarget

logger = logging.getLogger(__name__)


class ScriptAssembler:
    """Wraps compiled statements in a suite template and persists them.

    File names derive only from the suite name, so two suites whose names
    collapse to the same slug write the same file; the later one wins.
    """

    def __init__(self, target: ScriptTarget, specs_dir: str | Path):
        self.target = target
        self.specs_dir = Path(specs_dir)

    def spec_file_name(self, suite_name: str) -> str:
        return self.target.spec_file_name(suite_name)

    def spec_path(self, suite_name: str) -> Path:
        return self.specs_dir / self.spec_file_name(suite_name)

    def assemble(self, descriptor: TestSuiteDescriptor) -> str:
        """Render a suite without writing it."""
        return self.target.render_suite(descriptor)

    def _write(self, path: Path, content: str) -> Path:
        ensure_dir(self.specs_dir)
        if path.exists():
            logger.warning(f"Overwriting existing spec file: {path}")
        write_text(path, content)
        logger.info(f"📄 Spec written: {path}")
        return path

    def write(self, descriptor: TestSuiteDescriptor) -> Path:
        """Render and write a suite; returns the spec file path."""
        return self._write(self.spec_path(descriptor.name), self.assemble(descriptor))

    def _require_cypress(self) -> CypressTarget:
        if not isinstance(self.target, CypressTarget):
            raise TypeError(f"Target '{self.target.name}' cannot render this suite type")
        return self.target

    def write_accessibility_suite(self, name: str, path: str = "/") -> Path:
        target = self._require_cypress()
        spec_path = self.specs_dir / target.spec_file_name(name, suffix=target.accessibility_suffix)
        return self._write(spec_path, target.render_accessibility_suite(name, path))

    def write_route_suites(
        self,
        routes: list[str],
        base_url: str,
        viewports: list[Viewport],
        selectors: dict[str, str],
        accessibility: bool = True,
    ) -> list[Path]:
        """Write one route/viewport exploration spec per route."""
        target = self._require_cypress()
        logger.info(f"Generating tests for routes: {routes}")
        paths = []
        for route in routes:
            content = target.render_route_suite(
                route, base_url, viewports, selectors, accessibility=accessibility
            )
            paths.append(self._write(self.specs_dir / target.route_spec_file_name(route), content))
        return paths
