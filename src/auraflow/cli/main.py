"""Main CLI entry point for AuraFlow.

This module provides the command-line interface for running workflows and
inspecting tools, agents and memory.
"""

import asyncio
import json
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from tabulate import tabulate

from .. import __version__
from ..errors import AuraFlowError
from ..utils.logging import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--env-file", type=click.Path(dir_okay=False), default=None, help="Environment file to load (.env by default)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, env_file: str, verbose: bool) -> None:
    """AuraFlow CLI.

    Runs declarative multi-agent workflows in which LLM-backed agents call
    tools and delegate tasks to sub-agents.
    """
    load_dotenv(env_file)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument("workflow_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text", help="Output format")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (INFO by default, DEBUG with --verbose)",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Also write logs to this file")
@click.pass_context
def run(ctx: click.Context, workflow_file: Path, output_format: str, log_level: str, log_file: str) -> None:
    """Run the workflow defined in WORKFLOW_FILE."""
    from ..execution import WorkflowRunner

    level = log_level or ("DEBUG" if ctx.obj.get("verbose") else "INFO")
    setup_logging(level=level.upper(), log_file=log_file)

    try:
        runner = WorkflowRunner.from_file(workflow_file)
        result = asyncio.run(runner.run())
    except AuraFlowError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(result.model_dump_json(indent=2))
        return

    click.echo(f"Workflow: {runner.config.id} ({result.workflow_id})")
    click.echo(f"Duration: {result.duration_seconds:.2f}s")
    for key, value in result.outputs.items():
        click.echo(f"\n=== {key} ===")
        click.echo(value)


@main.command()
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", help="Output format")
def tools(output_format: str) -> None:
    """List built-in tools."""
    from ..tools import create_default_registry

    registry = create_default_registry()
    definitions = registry.definitions()

    if output_format == "json":
        click.echo(json.dumps([d.model_dump(exclude_none=True) for d in definitions], indent=2))
        return

    rows = [[d.name, d.description, ", ".join(d.parameters)] for d in definitions]
    click.echo(tabulate(rows, headers=["Name", "Description", "Parameters"], tablefmt="grid"))


@main.group()
def memory() -> None:
    """Query long-term workflow memory."""
    pass


@memory.command("query")
@click.argument("query")
@click.option("--workflow", "workflow_id", default=None, help="Restrict to one workflow execution ID")
@click.option("--agent", "agent_id", default=None, help="Restrict to one agent ID")
@click.option("--limit", type=int, default=5, show_default=True, help="Maximum number of results")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", help="Output format")
def memory_query(query: str, workflow_id: str, agent_id: str, limit: int, output_format: str) -> None:
    """Search memories relevant to QUERY using the configured backend."""
    from ..config import MemoryConfig
    from ..memory import MemorySearch, create_memory_provider

    try:
        provider = create_memory_provider(MemoryConfig.from_env())
    except AuraFlowError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if provider is None:
        click.echo("Memory backend is disabled. Set MEMORY_BACKEND to 'file' or 'qdrant'.", err=True)
        sys.exit(1)

    search = MemorySearch(provider)
    if agent_id:
        entries = asyncio.run(search.search_agent(query, agent_id, workflow_id=workflow_id, limit=limit))
    else:
        entries = asyncio.run(search.search(query, workflow_id=workflow_id, limit=limit))

    if output_format == "json":
        click.echo(json.dumps([e.model_dump() for e in entries], indent=2))
        return

    if not entries:
        click.echo("No memories found.")
        return

    rows = [
        [e.created_at.isoformat(timespec="seconds"), e.workflow_id, e.agent_id, e.step, e.content[:80]]
        for e in entries
    ]
    click.echo(tabulate(rows, headers=["Time", "Workflow", "Agent", "Step", "Content"], tablefmt="grid"))


@main.command()
@click.argument("workflow_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def agents(workflow_file: Path) -> None:
    """Show the agent tree defined in WORKFLOW_FILE."""
    from ..config import load_workflow_config

    try:
        config = load_workflow_config(workflow_file)
    except AuraFlowError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    def show(agent_config, depth: int) -> None:
        indent = "  " * depth
        tools_text = f" [tools: {', '.join(agent_config.tools)}]" if agent_config.tools else ""
        click.echo(f"{indent}- {agent_config.id}: {agent_config.role}{tools_text}")
        for sub in agent_config.sub_agents:
            show(sub, depth + 1)

    click.echo(f"Workflow: {config.id}")
    for agent_config in config.agents:
        show(agent_config, 0)


if __name__ == "__main__":
    main()
