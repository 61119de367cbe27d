"""Action Builder.

Compiles abstract Actions into statement text for a target dialect. The
builder is pure: no I/O, no state between calls, and the same action always
yields the same text.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from ui_test_agent.core.exceptions import InvalidActionError, UnsupportedAssertionKind
from ui_test_agent.core.models import (
    Action,
    AssertElementAction,
    AssertionKind,
    CompiledStatement,
    FillFormAction,
    NavigateAction,
    ScreenshotAction,
    TestSuiteDescriptor,
    WaitAction,
)
from ui_test_agent.targets.base import Target

logger = logging.getLogger(__name__)

PAIR_KINDS = (AssertionKind.ATTRIBUTE, AssertionKind.CSS_PROPERTY)
TEXT_KINDS = (AssertionKind.TEXT, AssertionKind.CONTAINS_TEXT)


class FormFieldKind(str, Enum):
    CHECKBOX = "checkbox"
    SELECT = "select"
    TEXT = "text"


def classify_form_field(selector: str, value: bool | str) -> FormFieldKind:
    """Guess the control type of a form field.

    Heuristic only: the builder never sees the page, so a boolean value means
    a checkbox and a selector mentioning ``select`` means a drop-down.
    Anything else is treated as a text input.
    """
    if isinstance(value, bool):
        return FormFieldKind.CHECKBOX
    if "select" in selector:
        return FormFieldKind.SELECT
    return FormFieldKind.TEXT


def resolve_kind(kind: str | AssertionKind, selector: str | None = None) -> AssertionKind:
    """Map a raw kind string onto AssertionKind or raise UnsupportedAssertionKind."""
    if isinstance(kind, AssertionKind):
        return kind
    try:
        return AssertionKind(kind)
    except ValueError:
        raise UnsupportedAssertionKind(str(kind), selector=selector) from None


def _is_count(value: str) -> bool:
    value = value.strip()
    return value.isascii() and value.isdigit()


def validate_expected(kind: AssertionKind, expected: str | None, selector: str) -> None:
    """Check that ``expected`` has the shape ``kind`` requires."""
    if kind in PAIR_KINDS:
        if not expected or "=" not in expected or not expected.split("=", 1)[0].strip():
            raise InvalidActionError(
                f"'{kind.value}' assertion on '{selector}' needs a name=value expectation, got {expected!r}",
                selector=selector,
            )
    elif kind == AssertionKind.COUNT:
        if expected is None or not _is_count(expected):
            raise InvalidActionError(
                f"'count' assertion on '{selector}' needs a numeric expectation, got {expected!r}",
                selector=selector,
            )
    elif kind in TEXT_KINDS:
        if expected is None:
            raise InvalidActionError(
                f"'{kind.value}' assertion on '{selector}' needs an expected string",
                selector=selector,
            )


@dataclass
class CompilationResult:
    """Statements compiled so far plus any per-action errors."""

    statements: list[CompiledStatement] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class ActionBuilder:
    """Translates Actions into CompiledStatements for one target."""

    def __init__(self, target: Target):
        self.target = target

    def compile(self, action: Action, index: int = 0) -> list[CompiledStatement]:
        """Compile one action.

        Most actions produce one statement; a form fill produces one per
        field, in mapping order.

        Raises:
            UnsupportedAssertionKind: the action's assertion kind is unknown
            InvalidActionError: the expected value has the wrong shape
        """
        texts = self._compile_texts(action)
        return [
            CompiledStatement(text=text, action_index=index, action_type=action.type)
            for text in texts
        ]

    def _compile_texts(self, action: Action) -> list[str]:
        t = self.target

        if isinstance(action, NavigateAction):
            return [t.navigate(action.url)]

        if isinstance(action, AssertElementAction):
            kind = resolve_kind(action.kind, action.selector)
            validate_expected(kind, action.expected, action.selector)
            expected = action.expected.strip() if kind == AssertionKind.COUNT else action.expected
            return [t.assertion(action.selector, kind, expected)]

        if isinstance(action, FillFormAction):
            return [self.compile_form_field(selector, value) for selector, value in action.fields.items()]

        if isinstance(action, ScreenshotAction):
            return [t.screenshot(action.name)]

        if isinstance(action, WaitAction):
            return [t.wait(action.duration_ms)]

        raise TypeError(f"Not an action: {action!r}")

    def compile_form_field(self, selector: str, value: bool | str) -> str:
        field_kind = classify_form_field(selector, value)
        if field_kind == FormFieldKind.CHECKBOX:
            return self.target.check(selector, value)
        if field_kind == FormFieldKind.SELECT:
            return self.target.select(selector, str(value))
        return self.target.type_text(selector, str(value))

    def compile_all(self, actions: list[Action], stop_on_error: bool = True) -> CompilationResult:
        """Compile actions in order.

        With ``stop_on_error`` the first failure is raised. Otherwise failing
        actions are recorded in ``errors`` and skipped.
        """
        result = CompilationResult()
        for index, action in enumerate(actions):
            try:
                result.statements.extend(self.compile(action, index))
            except (UnsupportedAssertionKind, InvalidActionError) as e:
                if stop_on_error:
                    raise
                logger.warning(f"Skipping action {index} ({action.type}): {e}")
                result.errors.append(e)
        return result

    def build(self, name: str, actions: list[Action], stop_on_error: bool = True) -> TestSuiteDescriptor:
        """Compile actions into a suite descriptor."""
        compiled = self.compile_all(actions, stop_on_error=stop_on_error)
        logger.debug(f"Compiled {len(actions)} actions into {len(compiled.statements)} statements for '{name}'")
        return TestSuiteDescriptor(name=name, statements=compiled.statements)
