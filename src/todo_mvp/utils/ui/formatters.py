"""Output formatters for different formats."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.table import Table

from todo_mvp.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("table", "json", "yaml", "quiet")


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "quiet":
        format_quiet(data)
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No items found[/yellow]")
            return
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_format_value(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _format_value(value))

    console.print(table)


def format_tasks_table(tasks: list[dict], heading: str | None = None) -> None:
    """Render tasks as a checklist table, completed tasks struck through."""
    table = Table(title=heading, show_header=True, header_style="bold magenta")
    table.add_column("", width=3)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title")

    for task in tasks:
        title = task.get("title") or task.get("description") or ""
        if task.get("completed"):
            table.add_row("[green]✓[/green]", task["id"], f"[strike dim]{title}[/strike dim]")
        else:
            table.add_row("○", task["id"], title)

    console.print(table)


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "id" in item:
                print(item["id"])
    elif isinstance(data, dict) and "id" in data:
        print(data["id"])


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
