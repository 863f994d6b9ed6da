"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table

from taskapp_cli.utils.ui.console import get_console

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display structured output.

    ``json`` and ``yaml`` print machine-readable text; ``table`` and
    ``pretty`` render a Rich table for a list of dicts.
    """
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.safe_dump(_plain(data), default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def _plain(data: Any) -> Any:
    """JSON round-trip so yaml never sees datetimes or pydantic types."""
    return json.loads(json.dumps(data, default=str))


def format_table(data: Any) -> None:
    """Format a list of dictionaries (or a single dict) as a table."""
    console = get_console()
    if isinstance(data, dict):
        data = [data]
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    columns = list(data[0].keys())
    for column in columns:
        table.add_column(column.replace("_", " ").title())
    for item in data:
        table.add_row(*(_cell(item.get(column)) for column in columns))
    console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "✓" if value else "✗"
    return escape(str(value))


def build_task_table(rows: list[tuple[str, str]], title: str | None = None) -> Table:
    """Build the task list table from ``(title, date)`` row contents."""
    table = Table(
        title=escape(title) if title else None,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("Date", style="cyan", no_wrap=True)
    for number, (task_title, date_text) in enumerate(rows, start=1):
        table.add_row(
            str(number),
            escape(task_title) if task_title else "[dim](untitled)[/dim]",
            escape(date_text),
        )
    return table


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {escape(message)}")
