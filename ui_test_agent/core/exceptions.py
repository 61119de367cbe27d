"""Custom exceptions for the UI test agent."""


class UITestError(Exception):
    """Base exception for UI test agent errors."""


class UnsupportedAssertionKind(UITestError):
    """Raised when an assertion kind is not in the recognized set."""

    def __init__(self, kind: str, selector: str | None = None) -> None:
        """Initialize error.

        Args:
            kind: The offending assertion kind
            selector: Selector of the action that carried it, if known
        """
        self.kind = kind
        self.selector = selector
        message = f"Unsupported assertion kind: '{kind}'"
        if selector:
            message += f" (selector '{selector}')"
        super().__init__(message)


class InvalidActionError(UITestError):
    """Raised when an action's expected value has the wrong shape."""

    def __init__(self, message: str, selector: str | None = None) -> None:
        """Initialize error.

        Args:
            message: Error message
            selector: Selector of the offending action
        """
        self.selector = selector
        super().__init__(message)


class ConfigurationError(UITestError, ValueError):
    """Raised when a config file is missing, unparsable or invalid."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config {path}: {reason}")

class RunnerInvocationFailed(UITestError):
    """Raised when the external automation engine reports a non-success outcome."""

    def __init__(self, engine_message: str, engine: str = "cypress", exit_code: int | None = None) -> None:
        """Initialize error.

        Args:
            engine_message: Message reported by the engine
            engine: Engine name
            exit_code: Process exit code, if the engine ran as a subprocess
        """
        self.engine_message = engine_message
        self.engine = engine
        self.exit_code = exit_code
        super().__init__(f"[{engine}] {engine_message}")


class FileSystemFailure(UITestError):
    """Raised when a directory cannot be created or a file cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize error.

        Args:
            path: Path that could not be created or written
            reason: Underlying OS error message
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Filesystem operation failed for {path}: {reason}")


class BrowserActionError(UITestError):
    """Base class for failures reported by the browser while driving a page."""

    def __init__(self, message: str, type: str = "unknown") -> None:
        super().__init__(message)
        self.type = type


class NavigationError(BrowserActionError):
    """Raised when navigation fails."""

    def __init__(self, message: str):
        super().__init__(message, type="navigation")


class ElementNotFoundError(BrowserActionError):
    """Raised when an element cannot be found or interacted with."""

    def __init__(self, message: str):
        super().__init__(message, type="element_not_found")
