"""Agent configuration."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError
from .models import DEFAULT_VIEWPORTS, Viewport

logger = logging.getLogger(__name__)

DEFAULT_SELECTORS = {
    "clickable": 'a, button, [role="button"]',
    "input": "input, textarea, select",
    "form": "form",
}


def ci_enabled(value: str | None = None) -> bool:
    """Return True when the CI indicator is set to a truthy value."""
    if value is None:
        value = os.environ.get("CI")
    if value is None:
        return False
    return value.strip().lower() not in ("", "0", "false", "no")


class AgentConfig(BaseModel):
    """Configuration for a UI test agent run."""

    base_url: str = "http://localhost:3000"
    root_dir: Path = Path("./cypress")
    output_dir: Path = Path("./cypress/results")
    config_file: Path = Path("./cypress.config.js")
    browser: str = "chrome"
    headless: bool = False
    routes: list[str] = Field(default_factory=lambda: ["/"])
    viewports: list[Viewport] = Field(default_factory=lambda: list(DEFAULT_VIEWPORTS))
    selectors: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SELECTORS))

    @classmethod
    def from_env(cls, **overrides: Any) -> "AgentConfig":
        """Build a config from environment defaults, then apply overrides."""
        values: dict[str, Any] = {"headless": ci_enabled()}
        if base_url := os.environ.get("UITEST_BASE_URL"):
            values["base_url"] = base_url
        if output_dir := os.environ.get("UITEST_OUTPUT_DIR"):
            values["output_dir"] = Path(output_dir)
        if browser := os.environ.get("UITEST_BROWSER"):
            values["browser"] = browser
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def load_config(path: Path, **overrides: Any) -> AgentConfig:
    """Load an AgentConfig from a YAML file layered over environment defaults.

    Raises:
        ConfigurationError: the file is missing, not YAML, not a mapping,
            or holds invalid values
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(str(path), e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(str(path), f"not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "must contain a mapping")

    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        config = AgentConfig.from_env(**data)
    except ValidationError as e:
        raise ConfigurationError(str(path), str(e)) from e
    logger.info(f"Loaded config from {path}")
    return config
