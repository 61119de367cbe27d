"""UI Test Agent - browser E2E test generation, execution and reporting."""

from ui_test_agent.agent import ActionFactory, PlaywrightTestingAgent, UITestingAgent
from ui_test_agent.artifacts import ArtifactManager
from ui_test_agent.builder import ActionBuilder, ScriptAssembler, load_suite, load_suites_from_directory
from ui_test_agent.core import (
    Action,
    AgentConfig,
    AssertElementAction,
    AssertionKind,
    CompiledStatement,
    ConfigurationError,
    FileSystemFailure,
    FillFormAction,
    InvalidActionError,
    NavigateAction,
    RunnerInvocationFailed,
    RunResult,
    ScreenshotAction,
    TestResult,
    TestSuiteDescriptor,
    UITestError,
    UnsupportedAssertionKind,
    Viewport,
    WaitAction,
)
from ui_test_agent.report import ReportRenderer, ReportSummary, group_screenshots
from ui_test_agent.runner import CypressEngine, RunOptions
from ui_test_agent.runtime import PlaywrightDriver, ResultAccumulator
from ui_test_agent.targets import CypressTarget, PlaywrightTarget, ScriptTarget, Target, TargetCapability

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Agents
    "UITestingAgent",
    "PlaywrightTestingAgent",
    "ActionFactory",
    # Models
    "Action",
    "AssertionKind",
    "NavigateAction",
    "AssertElementAction",
    "FillFormAction",
    "ScreenshotAction",
    "WaitAction",
    "CompiledStatement",
    "TestSuiteDescriptor",
    "TestResult",
    "RunResult",
    "Viewport",
    "AgentConfig",
    # Exceptions
    "UITestError",
    "UnsupportedAssertionKind",
    "InvalidActionError",
    "RunnerInvocationFailed",
    "ConfigurationError",
    "FileSystemFailure",
    # Building
    "ActionBuilder",
    "ScriptAssembler",
    "load_suite",
    "load_suites_from_directory",
    # Targets
    "Target",
    "ScriptTarget",
    "TargetCapability",
    "CypressTarget",
    "PlaywrightTarget",
    # Execution
    "CypressEngine",
    "RunOptions",
    "PlaywrightDriver",
    "ResultAccumulator",
    # Reporting
    "ReportRenderer",
    "ReportSummary",
    "group_screenshots",
    "ArtifactManager",
]
