"""Tests for the tool registry."""

from unittest.mock import Mock, patch

import pytest

from opensearch_agent_tools.config import ToolOverride, ToolsConfig
from opensearch_agent_tools.tools import (
    create_tool,
    get_factory_class,
    get_input_schema,
    get_tool_factory,
    list_tool_types,
)
from opensearch_agent_tools.tools.get_create_monitor_parameters import (
    DEFAULT_DESCRIPTION,
    INPUT_MODEL,
    CreateMonitorParametersInput,
    GetCreateMonitorParametersTool,
    GetCreateMonitorParametersToolFactory,
)


class TestRegistry:
    """Test lookup of tools by type name."""

    def test_list_tool_types(self) -> None:
        assert list_tool_types() == ["GetCreateMonitorParametersTool"]

    def test_get_factory_class(self) -> None:
        factory_class = get_factory_class("GetCreateMonitorParametersTool")
        assert factory_class is GetCreateMonitorParametersToolFactory

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(KeyError, match="NoSuchTool"):
            get_factory_class("NoSuchTool")

    def test_get_tool_factory_wires_client(self) -> None:
        client = Mock()
        factory = get_tool_factory("GetCreateMonitorParametersTool", client)
        tool = factory.create({})
        assert isinstance(tool, GetCreateMonitorParametersTool)
        assert tool.client is client

    def test_get_input_schema(self) -> None:
        schema = get_input_schema("GetCreateMonitorParametersTool")
        assert schema is not None
        assert schema.__name__ == "CreateMonitorParametersInput"
        assert "input" in schema.model_json_schema()["properties"]

    def test_get_input_schema_is_declared_model(self) -> None:
        schema = get_input_schema("GetCreateMonitorParametersTool")
        assert schema is INPUT_MODEL
        assert schema is CreateMonitorParametersInput

    def test_get_input_schema_unknown(self) -> None:
        assert get_input_schema("NoSuchTool") is None

    def test_get_input_schema_without_declared_model(self) -> None:
        with patch.dict(
            "opensearch_agent_tools.tools._TOOL_REGISTRY",
            {"BareTool": "opensearch_agent_tools.tools.base"},
        ):
            assert get_input_schema("BareTool") is None


class TestCreateTool:
    """Test building configured tools."""

    def test_defaults_without_config(self) -> None:
        tool = create_tool("GetCreateMonitorParametersTool")
        assert tool.name == "GetCreateMonitorParametersTool"
        assert tool.description == DEFAULT_DESCRIPTION

    def test_applies_overrides(self) -> None:
        config = ToolsConfig(
            tools={
                "GetCreateMonitorParametersTool": ToolOverride(
                    name="create_monitor_params", description="Parse monitors."
                )
            }
        )
        tool = create_tool("GetCreateMonitorParametersTool", config=config)
        assert tool.name == "create_monitor_params"
        assert tool.description == "Parse monitors."
        assert tool.get_type() == "GetCreateMonitorParametersTool"

    def test_ignores_overrides_for_other_types(self) -> None:
        config = ToolsConfig(tools={"OtherTool": ToolOverride(name="other")})
        tool = create_tool("GetCreateMonitorParametersTool", config=config)
        assert tool.name == "GetCreateMonitorParametersTool"
