"""Tests for the synchronous tool runner."""

from collections.abc import Mapping

import pytest

from opensearch_agent_tools.tools.base import (
    FailureCallback,
    ResponseCallback,
    run_tool,
)


class _SilentTool:
    name = "silent"
    description = "Never reports an outcome"

    def get_type(self) -> str:
        return "SilentTool"

    def get_version(self) -> str | None:
        return None

    def validate(self, parameters: Mapping[str, str]) -> bool:
        return True

    def run(
        self,
        parameters: Mapping[str, str],
        on_response: ResponseCallback,
        on_failure: FailureCallback,
    ) -> None:
        pass


class _EchoTool(_SilentTool):
    def run(
        self,
        parameters: Mapping[str, str],
        on_response: ResponseCallback,
        on_failure: FailureCallback,
    ) -> None:
        on_response(parameters.get("input", ""))


class TestRunTool:
    def test_returns_response(self) -> None:
        assert run_tool(_EchoTool(), {"input": "hello"}) == "hello"

    def test_missing_outcome_raises(self) -> None:
        with pytest.raises(RuntimeError, match="SilentTool"):
            run_tool(_SilentTool(), {})
