"""Core data models for the UI test agent."""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class AssertionKind(str, Enum):
    """Kinds of element assertion the builder understands."""

    EXISTS = "exists"
    TEXT = "text"
    ATTRIBUTE = "attribute"
    CLICKABLE = "clickable"
    VISIBLE = "visible"
    COUNT = "count"
    CONTAINS_TEXT = "containsText"
    CSS_PROPERTY = "cssProperty"


class NavigateAction(BaseModel):
    """Load a URL (absolute, or relative to the configured base URL)."""

    model_config = ConfigDict(frozen=True)

    type: Literal["navigate"] = "navigate"
    url: str


class AssertElementAction(BaseModel):
    """Check one property of the elements matched by a selector.

    ``kind`` stays a plain string so an unknown kind reaches the builder,
    which is where it is rejected.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["assert_element"] = "assert_element"
    selector: str
    kind: str
    expected: str | None = None


class FillFormAction(BaseModel):
    """Fill several form fields; mapping order is the order of the statements."""

    model_config = ConfigDict(frozen=True)

    type: Literal["fill_form"] = "fill_form"
    fields: dict[str, bool | str]


class ScreenshotAction(BaseModel):
    """Capture a named screenshot."""

    model_config = ConfigDict(frozen=True)

    type: Literal["screenshot"] = "screenshot"
    name: str


class WaitAction(BaseModel):
    """Pause for a fixed duration."""

    model_config = ConfigDict(frozen=True)

    type: Literal["wait"] = "wait"
    duration_ms: int = Field(ge=0)


Action = Annotated[
    NavigateAction | AssertElementAction | FillFormAction | ScreenshotAction | WaitAction,
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter[Action] = TypeAdapter(Action)
_action_list_adapter: TypeAdapter[list[Action]] = TypeAdapter(list[Action])


def parse_action(data: dict[str, Any]) -> Action:
    """Validate a tagged mapping into an Action."""
    return _action_adapter.validate_python(data)


def parse_actions(data: list[dict[str, Any]]) -> list[Action]:
    """Validate a list of tagged mappings into Actions, preserving order."""
    return _action_list_adapter.validate_python(data)


class CompiledStatement(BaseModel):
    """One line of target script text, traceable to its source action."""

    model_config = ConfigDict(frozen=True)

    text: str
    action_index: int
    action_type: str


class TestSuiteDescriptor(BaseModel):
    """A named, ordered sequence of compiled statements (one script file)."""

    __test__ = False

    name: str
    statements: list[CompiledStatement] = Field(default_factory=list)

    @property
    def lines(self) -> list[str]:
        return [s.text for s in self.statements]


class TestResult(BaseModel):
    """Outcome of one executed assertion.

    ``actual`` is always None when ``error`` is set.
    """

    __test__ = False

    selector: str
    kind: str
    expected: str | None = None
    actual: str | None = None
    error: str | None = None
    passed: bool
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    statement: str | None = None
    screenshot: str | None = None
    video: str | None = None


class SpecStats(BaseModel):
    """Per-spec statistics as reported by the engine."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    tests: int = 0
    passes: int = 0
    failures: int = 0
    pending: int = 0
    skipped: int = 0
    duration_ms: int = Field(default=0, alias="duration")


class SpecInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    relative: str | None = None


class SpecScreenshot(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    path: str


class SpecRun(BaseModel):
    """One spec file's run summary."""

    model_config = ConfigDict(extra="allow")

    spec: SpecInfo
    stats: SpecStats = Field(default_factory=SpecStats)
    video: str | None = None
    screenshots: list[SpecScreenshot] = Field(default_factory=list)


class RunResult(BaseModel):
    """Structured result returned by the external engine for one run."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    total_tests: int | None = Field(default=None, alias="totalTests")
    total_passed: int | None = Field(default=None, alias="totalPassed")
    total_failed: int | None = Field(default=None, alias="totalFailed")
    total_duration_ms: int | None = Field(default=None, alias="totalDuration")
    browser_name: str | None = Field(default=None, alias="browserName")
    runs: list[SpecRun] = Field(default_factory=list)
    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)

    @classmethod
    def from_engine(cls, payload: dict[str, Any]) -> "RunResult":
        """Build from the engine's camelCase payload, keeping it verbatim in ``raw``."""
        result = cls.model_validate(payload)
        result.raw = payload
        return result


class Viewport(BaseModel):
    """Named browser viewport."""

    name: str
    width: int
    height: int


DEFAULT_VIEWPORTS = [
    Viewport(name="desktop", width=1920, height=1080),
    Viewport(name="tablet", width=768, height=1024),
    Viewport(name="mobile", width=375, height=667),
]
