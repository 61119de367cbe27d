"""Action compilation and spec file assembly."""

from ui_test_agent.builder.action_builder import (
    ActionBuilder,
    CompilationResult,
    FormFieldKind,
    classify_form_field,
    resolve_kind,
    validate_expected,
)
from ui_test_agent.builder.assembler import ScriptAssembler
from ui_test_agent.builder.suite_loader import load_suite, load_suites_from_directory, normalize_action

__all__ = [
    "ActionBuilder",
    "CompilationResult",
    "FormFieldKind",
    "classify_form_field",
    "resolve_kind",
    "validate_expected",
    "ScriptAssembler",
    "load_suite",
    "load_suites_from_directory",
    "normalize_action",
]
