"""Jinja2 environment shared by the script and report renderers."""

import os
from functools import lru_cache

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape


def quote_literal(value: str) -> str:
    """Render a single-quoted string literal (valid in JS and Python)."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def _basename(value: str | None) -> str:
    if not value:
        return ""
    return os.path.basename(value.replace("\\", "/"))


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Return the template environment.

    HTML templates are autoescaped; script templates (``.js``) are not, so
    values interpolated into them must go through the ``jsq`` filter.
    """
    env = Environment(
        loader=PackageLoader("ui_test_agent", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["jsq"] = quote_literal
    env.filters["basename"] = _basename
    return env


def render(template_name: str, **context) -> str:
    return get_environment().get_template(template_name).render(**context)
