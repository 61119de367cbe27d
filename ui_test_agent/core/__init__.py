"""Core data model, exceptions and configuration."""

from ui_test_agent.core.config import AgentConfig, ci_enabled, load_config
from ui_test_agent.core.exceptions import (
    BrowserActionError,
    ConfigurationError,
    ElementNotFoundError,
    FileSystemFailure,
    InvalidActionError,
    NavigationError,
    RunnerInvocationFailed,
    UITestError,
    UnsupportedAssertionKind,
)
from ui_test_agent.core.models import (
    DEFAULT_VIEWPORTS,
    Action,
    AssertElementAction,
    AssertionKind,
    CompiledStatement,
    FillFormAction,
    NavigateAction,
    RunResult,
    ScreenshotAction,
    SpecInfo,
    SpecRun,
    SpecScreenshot,
    SpecStats,
    TestResult,
    TestSuiteDescriptor,
    Viewport,
    WaitAction,
    parse_action,
    parse_actions,
)

__all__ = [
    # Config
    "AgentConfig",
    "load_config",
    "ci_enabled",
    # Exceptions
    "UITestError",
    "UnsupportedAssertionKind",
    "InvalidActionError",
    "RunnerInvocationFailed",
    "ConfigurationError",
    "FileSystemFailure",
    "BrowserActionError",
    "NavigationError",
    "ElementNotFoundError",
    # Models
    "Action",
    "AssertionKind",
    "NavigateAction",
    "AssertElementAction",
    "FillFormAction",
    "ScreenshotAction",
    "WaitAction",
    "parse_action",
    "parse_actions",
    "CompiledStatement",
    "TestSuiteDescriptor",
    "TestResult",
    "RunResult",
    "SpecRun",
    "SpecInfo",
    "SpecStats",
    "SpecScreenshot",
    "Viewport",
    "DEFAULT_VIEWPORTS",
]
