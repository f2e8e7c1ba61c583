"""Create-monitor parameter extraction tool.

Parses the free-form ``input`` parameter an agent supplies when a user asks
for a new monitor, checks that an index was named, and hands the parsed
parameters back as JSON. Monitor-type specific fields are passed through
untouched; the description below documents them for the calling agent.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from opensearch_agent_tools.tools.base import (
    FailureCallback,
    ResponseCallback,
    run_tool,
)

logger = logging.getLogger(__name__)

TOOL_TYPE = "GetCreateMonitorParametersTool"

MISSING_INDEX_MESSAGE = (
    "Return this final answer to human directly and do not use other tools: "
    "'Please provide specific index name'. Please try to directly send this "
    "message to human to ask for index name"
)

# Consumed verbatim by the calling agent's prompt.
DEFAULT_DESCRIPTION = (
    "Use this tool to get parameters required by creating a new monitor."
    " The goal is to parse input parameters when user asks for creating a new"
    " monitor based on the data in the cluster."
    " The tool takes arguments with"
    " name of the monitor,"
    " monitor_type which defines the type of the monitor (options are"
    " query_level_monitor, bucket_level_monitor, cluster_metrics_monitor and"
    " doc_level_monitor, default is query_level_monitor),"
    " searchType which defines the way of creating monitor via UI"
    " (options are graph and query, default is graph),"
    " frequency which defines the period of monitoring (options are interval,"
    " daily, weekly and monthly, default is interval),"
    " the other fields differ based on different monitor_type."
    "1. If the monitor_type is query_level_monitor or bucket_level_monitor,"
    " an example of parameters is"
    "         {\n"
    "            name: 'test monitor',\n"
    "            monitor_type: 'query_level_monitor',\n"
    "            frequency: 'interval',\n"
    "            timezone: 'Japan',\n"
    "            daily: 0,\n"
    "            interval: 1,\n"
    "            unit: 'MINUTES',\n"
    "            weekly_mon: false,\n"
    "            weekly_tue: false,\n"
    "            weekly_wed: false,\n"
    "            weekly_thur: false,\n"
    "            weekly_fri: false,\n"
    "            weekly_sat: false,\n"
    "            weekly_sun: false,\n"
    "            monthly_type: 'day',\n"
    "            monthly_day: 1,\n"
    "            searchType: 'graph',\n"
    "            index: 'opensearch_dashboards_sample_data_ecommerce',\n"
    "            timefield: 'timestamp',\n"
    "            aggregationType: 'count',\n"
    "            aggregationField: 'bytes',\n"
    "            groupByField: 'bytes',\n"
    "            filterField: 'memory',\n"
    "            filterFieldType: 'number',\n"
    "            filterOperator: 'is',\n"
    "            filterValue: 'Japan',\n"
    "            bucketValue: 1,\n"
    "            bucketUnitOfTime: 'h',\n"
    "            trigger_name: 'test trigger',\n"
    "            trigger_severity: 1,\n"
    "            trigger_threshold_enum: 'ABOVE',\n"
    "            trigger_threshold: 1000,\n"
    "        }"
    "2. If the monitor_type is cluster_metrics_monitor, an example of parameters is"
    "{\n"
    "                 name: 'test monitor',\n"
    "                 monitor_type: 'cluster_metrics_monitor',\n"
    "                \"index\": [\n"
    "                    \"opensearch_dashboards_sample_data_logs\"\n"
    "                ],\n"
    "                \"schedule\": {\n"
    "                    \"period\": {\n"
    "                        \"unit\": \"MINUTES\",\n"
    "                        \"interval\": 1\n"
    "                    },\n"
    "                    \"timezone\": \"Japan\",\n"
    "                    \"daily\": 2,\n"
    "                    \"monthly\": {\n"
    "                        \"type\": \"day\",\n"
    "                        \"day\": 1\n"
    "                    },\n"
    "                    \"weekly\": {\n"
    "                        \"thu\": true,\n"
    "                        \"tue\": true,\n"
    "                        \"wed\": false,\n"
    "                        \"thur\": false,\n"
    "                        \"sat\": false,\n"
    "                        \"fri\": false,\n"
    "                        \"mon\": false,\n"
    "                        \"sun\": false\n"
    "                    },\n"
    "                    \"frequency\": \"weekly\"\n"
    "                },\n"
    "                \"search\": {\n"
    "                    \"searchType\": \"clusterMetrics\",\n"
    "                    \"bucketValue\": 1,\n"
    "                    \"timeField\": \"\",\n"
    "                    \"bucketUnitOfTime\": \"h\",\n"
    "                    \"groupBy\": [],\n"
    "                    \"filters\": [],\n"
    "                    \"aggregations\": []\n"
    "                },\n"
    "                \"triggers\": {\n"
    "                    \"test trigger 3\": {\n"
    "                        \"value\": 10000,\n"
    "                        \"enum\": \"ABOVE\"\n"
    "                    }\n"
    "                },\n"
    "                \"monitor_type\": \"cluster_metrics_monitor\"\n"
    "            }"
    "3. If the monitor_type is doc_level_monitor, an example of parameters is"
    "{\n"
    "                 name: 'test monitor',\n"
    "                 monitor_type: 'doc_level_monitor',\n"
    "                \"index\": [\n"
    "                    \"opensearch_dashboards_sample_data_logs\"\n"
    "                ],\n"
    "                \"schedule\": {\n"
    "                    \"period\": {\n"
    "                        \"unit\": \"MINUTES\",\n"
    "                        \"interval\": 1\n"
    "                    },\n"
    "                    \"timezone\": \"Japan\",\n"
    "                    \"daily\": 4,\n"
    "                    \"monthly\": {\n"
    "                        \"type\": \"day\",\n"
    "                        \"day\": 5\n"
    "                    },\n"
    "                    \"weekly\": {\n"
    "                        \"tue\": false,\n"
    "                        \"wed\": false,\n"
    "                        \"thur\": false,\n"
    "                        \"sat\": false,\n"
    "                        \"fri\": false,\n"
    "                        \"mon\": false,\n"
    "                        \"sun\": false\n"
    "                    },\n"
    "                    \"frequency\": \"monthly\"\n"
    "                },\n"
    "                \"search\": {\n"
    "                    \"searchType\": \"graph\"\n"
    "                },\n"
    "                \"triggers\": {\n"
    "                    \"test trigger 4\": [\n"
    "                        {\n"
    "                            \"query\": {\n"
    "                                \"expression\": \"name=test-query-4\",\n"
    "                                \"field\": \"bytes\",\n"
    "                                \"query\": 1,\n"
    "                                \"queryName\": \"test-query\",\n"
    "                                \"operator\": \"is\",\n"
    "                                \"tags\": []\n"
    "                            },\n"
    "                            \"script\": {\n"
    "                                \"source\": \"ctx.results[0].hits.total.value > 0\",\n"  # noqa: E501
    "                                \"lang\": \"painless\"\n"
    "                            }\n"
    "                        }\n"
    "                    ]\n"
    "                },\n"
    "                \"monitor_type\": \"doc_level_monitor\",\n"
    "                \"doc_level_input\": {\n"
    "                    \"queries\": [\n"
    "                        {\n"
    "                            \"field\": \"bytes\",\n"
    "                            \"query\": 1,\n"
    "                            \"queryName\": \"test-query\",\n"
    "                            \"operator\": \"is\",\n"
    "                            \"tags\": []\n"
    "                        }\n"
    "                    ]\n"
    "                }\n"
    "            }"
)


class MissingIndexError(ValueError):
    """Raised when the parsed parameters do not name an index."""

    def __init__(self, message: str = MISSING_INDEX_MESSAGE) -> None:
        super().__init__(message)


class CreateMonitorParametersInput(BaseModel):
    """Input contract for the tool.

    Only ``input`` is read; any other parameter the host passes along is
    accepted and ignored.
    """

    model_config = ConfigDict(extra="allow")

    input: str | None = Field(
        default=None,
        description=(
            "JSON object with the monitor creation parameters. "
            "Must include a non-blank 'index'."
        ),
    )


class CreateMonitorParametersOutput(BaseModel):
    """Output contract for the subprocess entry point."""

    success: bool
    parameters: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None


INPUT_MODEL = CreateMonitorParametersInput

ExtractionStatus = Literal["ok", "invalid_index", "decode_empty"]


@dataclass(frozen=True)
class ParameterExtraction:
    """Outcome of decoding ``input`` and checking its index.

    ``decode_empty`` means ``input`` was absent or not a JSON object, so
    ``parameters`` is empty and no index can be present.
    """

    status: ExtractionStatus
    parameters: dict[str, Any] = field(default_factory=dict)
    index: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def _decode_input(parameters: Mapping[str, Any]) -> dict[str, Any] | None:
    """Decode the ``input`` parameter as a JSON object, or return None."""
    if "input" not in parameters:
        return None

    try:
        decoded = json.loads(parameters["input"])
    except (json.JSONDecodeError, TypeError, RecursionError):
        logger.warning(
            "Failed to parse input from parameters, using empty parameters"
        )
        return None

    if not isinstance(decoded, dict):
        logger.warning(
            "Input parameter decoded to %s instead of an object, "
            "using empty parameters",
            type(decoded).__name__,
        )
        return None
    return decoded


def extract_parameters(parameters: Mapping[str, Any]) -> ParameterExtraction:
    """Decode ``parameters["input"]`` and check that it names an index."""
    decoded = _decode_input(parameters)
    if decoded is None:
        return ParameterExtraction(status="decode_empty")

    value = decoded.get("index")
    index = "" if value is None else str(value)
    if not index.strip():
        return ParameterExtraction(status="invalid_index", parameters=decoded)
    return ParameterExtraction(status="ok", parameters=decoded, index=index)


class GetCreateMonitorParametersTool:
    """Extracts create-monitor parameters from agent input."""

    TYPE = TOOL_TYPE

    def __init__(self, client: Any = None) -> None:
        """Initialize the tool.

        Args:
            client: Cluster client handle shared by every tool the host
                builds. The tool never calls it.
        """
        self.name = TOOL_TYPE
        self.description = DEFAULT_DESCRIPTION
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    def get_type(self) -> str:
        return TOOL_TYPE

    def get_version(self) -> str | None:
        return None

    def validate(self, parameters: Mapping[str, str]) -> bool:
        """Accept everything; the index check happens in ``run``."""
        return True

    def run(
        self,
        parameters: Mapping[str, str],
        on_response: ResponseCallback,
        on_failure: FailureCallback,
    ) -> None:
        """Parse ``input`` and respond with it as JSON.

        Fails with :class:`MissingIndexError` when no index was given.
        Malformed ``input`` is treated as if it were absent.
        """
        try:
            extraction = extract_parameters(parameters)
            logger.info("Got input parameters like %s", extraction.parameters)

            if not extraction.ok:
                raise MissingIndexError()

            response = json.dumps(extraction.parameters, allow_nan=False)
        except Exception as e:
            logger.error(
                "Failed to get create monitor parameters: %s", e, exc_info=True
            )
            on_failure(e)
            return

        on_response(response)


class GetCreateMonitorParametersToolFactory:
    """Builds :class:`GetCreateMonitorParametersTool` instances.

    Pass the client handle at construction. Hosts that look factories up
    by class use :meth:`get_instance` and wire the client once with
    :meth:`init`.
    """

    _instance: GetCreateMonitorParametersToolFactory | None = None
    _instance_lock = threading.Lock()

    def __init__(self, client: Any = None) -> None:
        self._client = client

    @classmethod
    def get_instance(cls) -> GetCreateMonitorParametersToolFactory:
        """Return the process-wide factory, creating it on first use."""
        if cls._instance is not None:
            return cls._instance
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def init(self, client: Any) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        return self._client

    def create(
        self, params: Mapping[str, Any] | None = None
    ) -> GetCreateMonitorParametersTool:
        """Return a new tool sharing this factory's client.

        ``params`` is accepted for host compatibility and ignored.
        """
        return GetCreateMonitorParametersTool(self._client)

    @property
    def default_description(self) -> str:
        return DEFAULT_DESCRIPTION

    @property
    def default_type(self) -> str:
        return TOOL_TYPE

    @property
    def default_version(self) -> str | None:
        return None

    def get_default_description(self) -> str:
        return self.default_description

    def get_default_type(self) -> str:
        return self.default_type

    def get_default_version(self) -> str | None:
        return self.default_version


def _resolve_parameters() -> dict[str, Any]:
    """Resolve parameters from AGENT_PARAMETERS env var or stdin."""
    agent_params = os.environ.get("AGENT_PARAMETERS", "")
    if agent_params and agent_params != "{}":
        resolved: dict[str, Any] = json.loads(agent_params)
        return resolved

    if not sys.stdin.isatty():
        raw = sys.stdin.read()
        config: dict[str, Any] = json.loads(raw) if raw.strip() else {}
    else:
        config = {}
    parameters = config.get("parameters", config)
    if not isinstance(parameters, dict):
        return config
    if "input" in config and "input" not in parameters:
        parameters["input"] = config["input"]
    return parameters


def main() -> None:
    """Entry point for subprocess execution."""
    parameters = _resolve_parameters()

    # Agents sometimes send the monitor object itself rather than its JSON.
    if isinstance(parameters.get("input"), dict):
        parameters["input"] = json.dumps(parameters["input"])

    tool = GetCreateMonitorParametersTool()
    try:
        response = run_tool(tool, parameters)
    except Exception as e:
        result = CreateMonitorParametersOutput(success=False, error=str(e))
    else:
        result = CreateMonitorParametersOutput(
            success=True, parameters=json.loads(response)
        )
    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
