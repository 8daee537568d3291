# deploy_changed_functions/cli/utils/output.py
"""Output formatting utilities"""

import os
import sys
from typing import Dict, NoReturn

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS, ENV_GITHUB_ACTIONS
from ...models import RunPlan, RunResult

console = Console()

ENV_GITHUB_OUTPUT = "GITHUB_OUTPUT"


def _escape_workflow_message(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def fail(message: str) -> NoReturn:
    """Mark the run as failed and exit"""
    console.print(f"{EMOJI_ERROR} {message}", style="red", markup=False, highlight=False)
    if os.environ.get(ENV_GITHUB_ACTIONS):
        print(f"::error::{_escape_workflow_message(message)}")
    sys.exit(1)


def write_github_outputs(values: Dict[str, str]) -> None:
    """Append step outputs when running inside GitHub Actions"""
    output_file = os.environ.get(ENV_GITHUB_OUTPUT)
    if not output_file:
        return

    with open(output_file, "a") as fh:
        for key, value in values.items():
            print(f"{key}={value}", file=fh)


def format_plan(plan: RunPlan) -> None:
    """Format and display change detection result"""
    table = Table(title="Change detection", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Snapshot", "found" if plan.snapshot_found else "[yellow]missing[/yellow]")
    table.add_row("firebase.json changed", "yes" if plan.config_changed else "no")
    table.add_row("Global paths changed", ", ".join(plan.changed_global_paths) or "-")
    table.add_row("Full deploy forced", "[yellow]yes[/yellow]" if plan.global_changed else "no")
    table.add_row("Changed files", "\n".join(plan.changed_files) or "-")
    table.add_row("Deploy target", f"[cyan]{plan.target.describe()}[/cyan]")

    console.print(table)


def format_run_result(result: RunResult) -> None:
    """Format and display run result"""
    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] {result.message or 'Done'}",
        "",
        f"[bold]Target:[/bold] {result.target.describe() if result.target else '-'}",
        f"[bold]Status:[/bold] {result.status.value}",
        f"[bold]Deploy attempts:[/bold] {len(result.attempts)}",
        f"[bold]Cache updated:[/bold] {'yes' if result.cache_updated else 'no'}",
    ]

    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.1f}s")

    panel = Panel(
        "\n".join(lines),
        title="Deploy Result",
        border_style="green"
    )
    console.print(panel)
