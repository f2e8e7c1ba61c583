"""Command line interface for opensearch-agent-tools."""

import json
import logging
import sys
from pathlib import Path

import click

from opensearch_agent_tools.config import load_tools_config
from opensearch_agent_tools.tools import (
    create_tool,
    get_input_schema,
    list_tool_types,
)
from opensearch_agent_tools.tools.base import Tool, run_tool


def _build_tool(tool_type: str, config_path: str | None) -> Tool:
    """Create a tool with configured overrides, reporting errors to click."""
    if tool_type not in list_tool_types():
        raise click.ClickException(f"Unknown tool type: {tool_type}")

    try:
        config = load_tools_config(Path(config_path) if config_path else None)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    return create_tool(tool_type, config=config)


@click.group()
@click.version_option(package_name="opensearch-agent-tools")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level for tool diagnostics (written to stderr)",
)
def cli(log_level: str) -> None:
    """OpenSearch agent tools - run and inspect agent tool plugins."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command("list-tools")
def list_tools() -> None:
    """List registered tool types."""
    for tool_type in list_tool_types():
        click.echo(tool_type)


@cli.command()
@click.argument("tool_type")
@click.option("--config", "config_path", default=None, help="Tool config YAML")
@click.option(
    "--json", "as_json", is_flag=True, help="Output descriptor and input schema"
)
def describe(tool_type: str, config_path: str | None, as_json: bool) -> None:
    """Show a tool's name, type, version and description."""
    tool = _build_tool(tool_type, config_path)

    if as_json:
        schema = get_input_schema(tool_type)
        payload = {
            "name": tool.name,
            "type": tool.get_type(),
            "version": tool.get_version(),
            "description": tool.description,
            "input_schema": schema.model_json_schema() if schema else None,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Name: {tool.name}")
    click.echo(f"Type: {tool.get_type()}")
    click.echo(f"Version: {tool.get_version() or '-'}")
    click.echo("")
    click.echo(tool.description)


@cli.command()
@click.argument("tool_type")
@click.option(
    "--input",
    "input_data",
    default=None,
    help="Value for the tool's 'input' parameter (reads stdin if omitted)",
)
@click.option("--config", "config_path", default=None, help="Tool config YAML")
def run(tool_type: str, input_data: str | None, config_path: str | None) -> None:
    """Run a tool and print its response."""
    tool = _build_tool(tool_type, config_path)

    if input_data is None and not sys.stdin.isatty():
        input_data = sys.stdin.read()

    parameters: dict[str, str] = {}
    if input_data is not None and input_data.strip():
        parameters["input"] = input_data

    if not tool.validate(parameters):
        raise click.ClickException(f"Parameters rejected by {tool_type}")

    try:
        response = run_tool(tool, parameters)
    except Exception as e:
        raise click.ClickException(str(e)) from e

    click.echo(response)


if __name__ == "__main__":
    cli()
