"""make-mcp CLI entry point."""

import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, Optional

import typer

from make_mcp import __version__
from make_mcp.adapters.make import DEFAULT_LOG_LIMIT, MakeAdapter
from make_mcp.client.http import HTTPClientConfig
from make_mcp.errors.canonical import MakeMCPError
from make_mcp.logging import configure_logging
from make_mcp.server.app_server import MakeMCPServer
from make_mcp.server.tools import (
    GET_SCENARIO_LOGS_TOOL,
    LIST_SCENARIOS_TOOL,
    RUN_SCENARIO_TOOL,
    ToolDispatcher,
)
from make_mcp.settings import MakeSettings, load_settings

from .ux import print_error, print_logs_table, print_scenarios_table, print_success

app = typer.Typer(
    help="Make.com MCP server and scenario tools", no_args_is_help=True
)


def _validate_output_format(format: str) -> None:
    if format not in {"text", "json"}:
        print_error(f"Unsupported output format: {format}. Use text or json.")
        raise typer.Exit(2)


def _call_tool(settings: MakeSettings, name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    async def _run() -> Dict[str, Any]:
        adapter = MakeAdapter(
            settings.API_TOKEN,
            settings.API_URL,
            config=HTTPClientConfig(timeout_ms=settings.HTTP_TIMEOUT_MS),
        )
        try:
            return await ToolDispatcher(adapter).dispatch(name, arguments)
        finally:
            await adapter.aclose()

    return _run_or_exit(_run)


def _run_or_exit(factory: Callable[[], Awaitable[Any]]) -> Any:
    try:
        return asyncio.run(factory())
    except MakeMCPError as e:
        print_error(str(e))
        raise typer.Exit(1) from e


def _settings(ctx: typer.Context) -> MakeSettings:
    settings = ctx.obj
    if settings is None:
        settings = load_settings()
        configure_logging(settings.LOG_LEVEL, secrets=[settings.API_TOKEN])
        ctx.obj = settings
    return settings


def _version_callback(value: Optional[bool]) -> None:
    if value:
        typer.echo(f"make-mcp version: {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Make.com MCP server."""


@app.command()
def serve(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override MAKE_LOG_LEVEL"
    ),
) -> None:
    """Serve the Make.com tools over MCP stdio."""
    settings = _settings(ctx)
    if log_level:
        configure_logging(log_level, secrets=[settings.API_TOKEN])
    server = MakeMCPServer(settings)
    try:
        asyncio.run(server.run_stdio())
    except KeyboardInterrupt:
        raise typer.Exit(0)


@app.command()
def scenarios(
    ctx: typer.Context,
    format: str = typer.Option("text", "--format", help="Output format (text|json)"),
) -> None:
    """List Make.com scenarios."""
    _validate_output_format(format)
    payload = _call_tool(_settings(ctx), LIST_SCENARIOS_TOOL, {})
    if format == "json":
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_scenarios_table(payload["scenarios"])


@app.command()
def logs(
    ctx: typer.Context,
    scenario_id: str = typer.Argument(..., help="Scenario ID"),
    limit: int = typer.Option(DEFAULT_LOG_LIMIT, "--limit", "-n", min=1, help="Number of executions"),
    format: str = typer.Option("text", "--format", help="Output format (text|json)"),
) -> None:
    """Show recent executions of a scenario."""
    _validate_output_format(format)
    payload = _call_tool(
        _settings(ctx),
        GET_SCENARIO_LOGS_TOOL,
        {"scenarioId": scenario_id, "limit": limit},
    )
    if format == "json":
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_logs_table(scenario_id, payload["logs"])


@app.command()
def run(
    ctx: typer.Context,
    scenario_id: str = typer.Argument(..., help="Scenario ID"),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON object passed to the scenario"),
) -> None:
    """Start a scenario run."""
    arguments: Dict[str, Any] = {"scenarioId": scenario_id}
    if data:
        try:
            parsed = json.loads(data)
        except json.JSONDecodeError as e:
            print_error(f"--data is not valid JSON: {e}")
            raise typer.Exit(2) from e
        if not isinstance(parsed, dict):
            print_error("--data must be a JSON object")
            raise typer.Exit(2)
        arguments["data"] = parsed
    payload = _call_tool(_settings(ctx), RUN_SCENARIO_TOOL, arguments)
    print_success(f"{payload['message']} (execution {payload['executionId']})")


def run_cli() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run_cli()
