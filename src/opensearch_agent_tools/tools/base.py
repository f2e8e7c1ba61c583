"""Contracts between tools and the host runtime that invokes them."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

ResponseCallback = Callable[[str], None]
FailureCallback = Callable[[Exception], None]


class Tool(Protocol):
    """A capability registered with the host and invoked by type name."""

    name: str
    description: str

    def get_type(self) -> str:
        """Return the fixed type identifier the host registers the tool under."""
        ...

    def get_version(self) -> str | None:
        """Return the tool version, or None when the tool is unversioned."""
        ...

    def validate(self, parameters: Mapping[str, str]) -> bool:
        """Pre-invocation check run by the host before ``run``."""
        ...

    def run(
        self,
        parameters: Mapping[str, str],
        on_response: ResponseCallback,
        on_failure: FailureCallback,
    ) -> None:
        """Invoke the tool.

        Exactly one of ``on_response`` and ``on_failure`` is called, once.
        """
        ...


class ToolFactory(Protocol):
    """Builds tool instances for the host registry."""

    def create(self, params: Mapping[str, Any] | None = None) -> Tool:
        """Return a new tool instance."""
        ...

    def get_default_description(self) -> str: ...

    def get_default_type(self) -> str: ...

    def get_default_version(self) -> str | None: ...


def run_tool(tool: Tool, parameters: Mapping[str, str]) -> str:
    """Run a tool synchronously and return its response.

    Raises:
        Exception: Whatever the tool reported through its failure callback.
        RuntimeError: If the tool returned without reporting either outcome.
    """
    responses: list[str] = []
    failures: list[Exception] = []

    tool.run(parameters, responses.append, failures.append)

    if failures:
        raise failures[0]
    if not responses:
        msg = f"Tool {tool.get_type()} completed without a response"
        raise RuntimeError(msg)
    return responses[0]
