"""Shared test fixtures and configuration."""

from collections.abc import Generator

import pytest

from opensearch_agent_tools.tools.get_create_monitor_parameters import (
    GetCreateMonitorParametersToolFactory,
)


@pytest.fixture(autouse=True)
def reset_factory_singleton() -> Generator[None, None, None]:
    """Give every test a fresh process-wide factory."""
    GetCreateMonitorParametersToolFactory._instance = None
    yield
    GetCreateMonitorParametersToolFactory._instance = None


@pytest.fixture(autouse=True)
def isolate_tools_config(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep tests from reading a tools.yaml in the working directory."""
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv(
        "OPENSEARCH_AGENT_TOOLS_CONFIG", str(config_dir / "tools.yaml")
    )
    monkeypatch.delenv("AGENT_PARAMETERS", raising=False)
