"""OpenSearch agent tools - tool plugins for agent orchestration hosts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("opensearch-agent-tools")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
