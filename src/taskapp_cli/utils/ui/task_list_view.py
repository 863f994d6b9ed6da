"""Rich rendering of the task list screen."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from taskapp_cli.services.task_list_presenter import Row, TaskListView
from taskapp_cli.utils.ui.console import get_console
from taskapp_cli.utils.ui.formatters import build_task_table


class RichTaskListView(TaskListView):
    """TaskListView that prints to a Rich console.

    Keeps a copy of the displayed rows so removals can be reported by title.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        title: str = "Tasks",
        render_rows: bool = True,
    ):
        self.console = console or get_console()
        self.title = title
        self.render_rows = render_rows
        self.rows: list[Row] = []
        self.errors: list[str] = []

    def show_rows(self, rows: list[Row]) -> None:
        self.rows = list(rows)
        if self.render_rows:
            self.render()

    def render(self) -> None:
        if not self.rows:
            self.console.print("[yellow]No tasks found[/yellow]")
            return
        self.console.print(build_task_table(self.rows, title=self.title))

    def remove_row(self, index: int, animation: str | None = None) -> None:
        task_title, date_text = self.rows.pop(index)
        style = "dim" if animation else "default"
        self.console.print(
            f"[{style}]Removed row {index + 1}:[/{style}] "
            f"{escape(task_title or '(untitled)')} ({escape(date_text)})"
        )

    def show_error(self, message: str) -> None:
        self.errors.append(message)
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def clear_search(self) -> None:
        self.title = "Tasks"
        self.console.print("[dim]Search cleared[/dim]")
