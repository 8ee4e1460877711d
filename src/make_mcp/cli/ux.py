"""Console output helpers for the make-mcp CLI."""

import logging
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

CUSTOM_THEME = Theme({
    "info": "bold cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "heading": "bold white on blue",
})

console = Console(theme=CUSTOM_THEME)
err_console = Console(theme=CUSTOM_THEME, stderr=True)

logger = logging.getLogger("make_mcp.cli")


def print_info(message: str, *args: Any, log: bool = True, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(f"[info]INFO:[/info] {message}", *args, **kwargs)
    if log:
        logger.info(message)


def print_success(message: str, *args: Any, log: bool = True, **kwargs: Any) -> None:
    console.print(f"[success]SUCCESS:[/success] {message}", *args, **kwargs)
    if log:
        logger.info(f"SUCCESS: {message}")


def print_error(message: str, *args: Any, log: bool = True, **kwargs: Any) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[error]ERROR:[/error] {message}", *args, **kwargs)
    if log:
        logger.error(message)


def format_status(status: Any) -> str:
    if not status:
        return "❓ Unknown"

    status_lower = str(status).lower()

    if status_lower == "inactive":
        return "[dim]⏸ Inactive[/dim]"
    elif "fail" in status_lower or "error" in status_lower:
        return f"[red]❌ {status}[/red]"
    elif "warning" in status_lower:
        return f"[yellow]⚠ {status}[/yellow]"
    elif "success" in status_lower or "complet" in status_lower:
        return f"[green]✅ {status}[/green]"
    else:
        return f"[green]▶ {status}[/green]"


def print_scenarios_table(scenarios: List[Dict[str, Any]]) -> None:
    """Print scenarios as a table."""
    if not scenarios:
        print_info("No scenarios found.", log=False)
        return

    table = Table(title=f"[heading]Scenarios ({len(scenarios)})[/heading]", expand=False, border_style="blue")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bright_blue")
    table.add_column("Status")
    table.add_column("Last run", style="yellow")
    table.add_column("Folder", style="magenta")

    for scenario in scenarios:
        table.add_row(
            str(scenario.get("id")),
            scenario.get("name") or "",
            format_status(scenario.get("status")),
            str(scenario.get("lastRun") or "-"),
            scenario.get("folder") or "-",
        )
    console.print(table)


def _error_count(errors: Any) -> str:
    if isinstance(errors, list):
        return str(len(errors))
    return str(errors) if errors else "0"


def print_logs_table(scenario_id: str, logs: List[Dict[str, Any]]) -> None:
    """Print execution logs of a scenario as a table."""
    if not logs:
        print_info(f"No executions found for scenario {scenario_id}.", log=False)
        return

    table = Table(
        title=f"[heading]Executions of {scenario_id} ({len(logs)})[/heading]",
        expand=False,
        border_style="blue",
    )
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Started", style="yellow")
    table.add_column("Finished", style="yellow")
    table.add_column("Operations", justify="right")
    table.add_column("Errors", justify="right", style="red")

    for log in logs:
        table.add_row(
            str(log.get("id")),
            format_status(log.get("status")),
            str(log.get("startedAt") or "-"),
            str(log.get("finishedAt") or "-"),
            str(log.get("operations") if log.get("operations") is not None else "-"),
            _error_count(log.get("errors")),
        )
    console.print(table)
