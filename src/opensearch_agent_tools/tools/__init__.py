"""Tool registry: maps tool type names to their implementations.

Each tool module defines the tool class, a ``<TYPE>Factory`` class and an
``INPUT_MODEL`` naming its Pydantic input contract.
Modules are imported lazily the first time their type is requested.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import BaseModel

    from opensearch_agent_tools.config import ToolsConfig
    from opensearch_agent_tools.tools.base import Tool, ToolFactory

_TOOL_REGISTRY: dict[str, str] = {
    "GetCreateMonitorParametersTool": (
        "opensearch_agent_tools.tools.get_create_monitor_parameters"
    ),
}


def list_tool_types() -> list[str]:
    """Return the registered tool type names, sorted."""
    return sorted(_TOOL_REGISTRY)


def get_factory_class(tool_type: str) -> type[ToolFactory]:
    """Import and return the factory class registered for ``tool_type``.

    Raises:
        KeyError: If no tool is registered under ``tool_type``.
    """
    module_path = _TOOL_REGISTRY.get(tool_type)
    if module_path is None:
        raise KeyError(f"Unknown tool type: {tool_type}")

    module = importlib.import_module(module_path)
    factory_class: type[ToolFactory] = getattr(module, f"{tool_type}Factory")
    return factory_class


def get_input_schema(tool_type: str) -> type[BaseModel] | None:
    """Get the Pydantic input schema for a registered tool.

    Returns None if the tool type is unknown or defines no input model.
    """
    module_path = _TOOL_REGISTRY.get(tool_type)
    if module_path is None:
        return None

    module = importlib.import_module(module_path)
    input_model: type[BaseModel] | None = getattr(module, "INPUT_MODEL", None)
    return input_model


def get_tool_factory(tool_type: str, client: Any = None) -> ToolFactory:
    """Return a new factory for ``tool_type`` wired to ``client``."""
    factory_class = get_factory_class(tool_type)
    return factory_class(client)  # type: ignore[call-arg]


def create_tool(
    tool_type: str,
    client: Any = None,
    params: Mapping[str, Any] | None = None,
    config: ToolsConfig | None = None,
) -> Tool:
    """Build a tool and apply any configured name/description overrides."""
    tool = get_tool_factory(tool_type, client).create(params)
    if config is not None:
        config.apply(tool)
    return tool
