"""Per-run result accumulation."""

from dataclasses import dataclass, field

from ui_test_agent.core.models import TestResult


@dataclass
class ResultAccumulator:
    """Collects the results and artifacts of one direct-driving run.

    Callers create one per run and pass it in (or take the one returned);
    nothing is shared between runs.
    """

    results: list[TestResult] = field(default_factory=list)
    screenshots: list[str] = field(default_factory=list)
    videos: list[str] = field(default_factory=list)

    def add(self, result: TestResult) -> TestResult:
        self.results.append(result)
        return result

    def add_screenshot(self, path: str) -> None:
        self.screenshots.append(path)

    def add_video(self, path: str | None) -> None:
        if path:
            self.videos.append(path)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return len(self.results) - self.passed

    def __len__(self) -> int:
        return len(self.results)
