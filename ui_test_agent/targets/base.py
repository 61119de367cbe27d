"""Abstract target dialects.

A target is the external engine a compiled action is written for. Every
target can turn actions into statement text; script targets can also wrap
those statements into a runnable spec file.
"""

import re
from abc import ABC, abstractmethod
from enum import Enum

from ui_test_agent.core.models import AssertionKind, TestSuiteDescriptor
from ui_test_agent.templating import quote_literal


def split_pair(expected: str) -> tuple[str, str]:
    """Split a ``name=value`` expectation on the first ``=`` only."""
    name, _, value = expected.partition("=")
    return name.strip(), value


class TargetCapability(str, Enum):
    """What a target engine can do with compiled actions."""

    GENERATES_SCRIPT = "generates_script"
    DRIVES_DIRECTLY = "drives_directly"


class Target(ABC):
    """Statement dialect of one automation engine."""

    name: str = "abstract"
    capabilities: frozenset[TargetCapability] = frozenset()

    def supports(self, capability: TargetCapability) -> bool:
        return capability in self.capabilities

    quote = staticmethod(quote_literal)

    @abstractmethod
    def navigate(self, url: str) -> str:
        ...

    @abstractmethod
    def assertion(self, selector: str, kind: AssertionKind, expected: str | None) -> str:
        """Render one element check.

        ``expected`` has already been validated for ``kind``.
        """

    @abstractmethod
    def check(self, selector: str, checked: bool) -> str:
        ...

    @abstractmethod
    def select(self, selector: str, value: str) -> str:
        ...

    @abstractmethod
    def type_text(self, selector: str, value: str) -> str:
        """Render a clear-then-type statement."""

    @abstractmethod
    def screenshot(self, name: str) -> str:
        ...

    @abstractmethod
    def wait(self, duration_ms: int) -> str:
        ...


class ScriptTarget(Target):
    """A target that generates spec files for an external runner."""

    capabilities = frozenset({TargetCapability.GENERATES_SCRIPT})
    file_suffix: str = ".txt"

    @staticmethod
    def slugify(name: str) -> str:
        """Collapse whitespace runs to underscores and lower-case."""
        return re.sub(r"\s+", "_", name).lower()

    def spec_file_name(self, suite_name: str, suffix: str | None = None) -> str:
        return f"{self.slugify(suite_name)}{suffix or self.file_suffix}"

    @abstractmethod
    def render_suite(self, descriptor: TestSuiteDescriptor) -> str:
        """Wrap compiled statements in the runner's suite/case template."""
