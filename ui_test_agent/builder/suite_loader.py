"""Suite loader for YAML suite files.

A suite file has a ``name`` and an ordered ``actions`` list. Actions may be
fully tagged mappings (``{type: navigate, url: /}``) or single-key
shorthands::

    name: Example Test
    actions:
      - navigate: /
      - assert: {selector: h1, kind: text, expected: Example Domain}
      - fill_form: {"#name": Alice, "#subscribe": true}
      - screenshot: homepage
      - wait: 500
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from ui_test_agent.core.models import Action, parse_actions

logger = logging.getLogger(__name__)

SHORTHANDS = {
    "navigate": ("navigate", "url"),
    "screenshot": ("screenshot", "name"),
    "wait": ("wait", "duration_ms"),
    "fill_form": ("fill_form", "fields"),
}


def normalize_action(raw: Any) -> dict[str, Any]:
    """Expand a shorthand action mapping into its tagged form."""
    if not isinstance(raw, dict):
        raise ValueError(f"Action must be a mapping, got {raw!r}")

    if "type" in raw:
        return dict(raw)

    if len(raw) != 1:
        raise ValueError(f"Shorthand action must have exactly one key, got {sorted(raw)}")

    key, value = next(iter(raw.items()))
    if key == "assert":
        if not isinstance(value, dict):
            raise ValueError(f"'assert' needs a mapping with selector/kind, got {value!r}")
        return {"type": "assert_element", **value}
    if key in SHORTHANDS:
        action_type, field_name = SHORTHANDS[key]
        return {"type": action_type, field_name: value}

    raise ValueError(f"Unknown action '{key}'")


def load_suite(path: Path) -> tuple[str, list[Action]]:
    """Load a single suite from a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        (suite name, ordered actions); the name defaults to the file stem
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Suite file {path} must contain a mapping")

    name = str(data.get("name", path.stem))
    raw_actions = data.get("actions", [])
    actions = parse_actions([normalize_action(raw) for raw in raw_actions])
    return name, actions


def load_suites_from_directory(directory: Path) -> list[tuple[str, list[Action]]]:
    """Load all suites from a directory.

    Args:
        directory: Path to directory containing ``*.yml`` / ``*.yaml`` files

    Returns:
        List of (name, actions), sorted by suite name. Files that fail to
        parse are logged and skipped.
    """
    suites: list[tuple[str, list[Action]]] = []

    if not directory.exists():
        logger.warning(f"Suites directory not found: {directory}")
        return suites

    paths = sorted([*directory.glob("*.yml"), *directory.glob("*.yaml")])
    for path in paths:
        try:
            name, actions = load_suite(path)
        except Exception as e:
            logger.error(f"Failed to load suite {path}: {e}")
            continue
        suites.append((name, actions))
        logger.info(f"Loaded suite: {name} ({len(actions)} actions)")

    suites.sort(key=lambda s: s[0])
    logger.info(f"Loaded {len(suites)} suites from {directory}")
    return suites
