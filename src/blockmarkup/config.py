"""Rendering configuration.

Settings can be built in code or loaded from a YAML file, either at the top
level of the file or under a ``render:`` section.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .exceptions import ParseError
from .styles import StyleTableName, get_style_table


class DepthPolicy(str, Enum):
    """How list items that jump more than one level deeper are handled."""

    NEST = "nest"  # Nest the deeper run directly under the preceding item
    STRICT = "strict"  # Raise DepthError for any list item deeper than its predecessor + 1
    FLAT = "flat"  # Render the deeper item as a sibling at the current level


class RenderConfig(BaseModel):
    """Configuration for HTML rendering."""

    style_table: StyleTableName = StyleTableName.NAMED
    # label -> {cssProperty: value}; merged over the selected table
    custom_styles: dict[str, dict[str, str]] = Field(default_factory=dict)
    depth_policy: DepthPolicy = DepthPolicy.NEST
    indent: str = "  "
    line_break: str = "<br/>"

    @field_validator("indent")
    @classmethod
    def indent_is_whitespace(cls, v: str) -> str:
        """Indentation may only contain spaces and tabs."""
        if v.strip(" \t"):
            raise ValueError(f"indent must contain only spaces or tabs, got {v!r}")
        return v

    def resolved_style_table(self) -> dict[str, dict[str, str]]:
        """The selected built-in style table with custom_styles applied."""
        return get_style_table(self.style_table, self.custom_styles)


def load_render_config(config_path: Path | str) -> RenderConfig:
    """Load rendering configuration from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated RenderConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or invalid
        ParseError: If the file is not valid YAML
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e

    if not data:
        raise ValueError("Empty configuration file")

    if not isinstance(data, dict):
        raise ValueError("Config must contain a mapping at the root level")

    section: Any = data.get("render", data)
    if not isinstance(section, dict):
        raise ValueError("'render' section must be a mapping")

    return RenderConfig.model_validate(section)
