"""Tool configuration loading.

The host may rename a tool or replace its description after construction.
Overrides are kept in a YAML file keyed by tool type::

    tools:
      GetCreateMonitorParametersTool:
        name: create_monitor_params
        description: Parse monitor parameters from the user request.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

if TYPE_CHECKING:
    from opensearch_agent_tools.tools.base import Tool

CONFIG_ENV_VAR = "OPENSEARCH_AGENT_TOOLS_CONFIG"
DEFAULT_CONFIG_PATH = Path(".opensearch-agent-tools") / "tools.yaml"


class ToolOverride(BaseModel):
    """Per-tool display overrides."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None


class ToolsConfig(BaseModel):
    """Overrides for every configured tool type."""

    tools: dict[str, ToolOverride] = Field(default_factory=dict)

    def override_for(self, tool_type: str) -> ToolOverride | None:
        return self.tools.get(tool_type)

    def apply(self, tool: Tool) -> Tool:
        """Set the configured name and description on ``tool``, if any."""
        override = self.override_for(tool.get_type())
        if override is None:
            return tool
        if override.name is not None:
            tool.name = override.name
        if override.description is not None:
            tool.description = override.description
        return tool


def resolve_config_path(path: Path | str | None = None) -> Path:
    """Pick the config file: explicit path, then env var, then the default."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR, "")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_tools_config(path: Path | str | None = None) -> ToolsConfig:
    """Load tool overrides from YAML.

    A missing file yields an empty configuration.

    Raises:
        ValueError: If the file is not valid YAML or has an unexpected shape.
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        return ToolsConfig()

    try:
        with config_path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in tool config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Tool config {config_path} must be a mapping")

    try:
        return ToolsConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid tool config {config_path}: {e}") from e
