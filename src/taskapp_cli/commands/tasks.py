"""Task commands - list, add, edit and delete rows of the task list."""

from datetime import datetime

import typer

from taskapp_cli.models import Task
from taskapp_cli.repositories import NotificationError
from taskapp_cli.services.config_service import get_config_service
from taskapp_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_STORE
from taskapp_cli.utils.typer_helpers import SuggestingGroup
from taskapp_cli.utils.ui.console import get_console
from taskapp_cli.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_info,
    format_output,
    format_success,
    format_warning,
)
from taskapp_cli.utils.ui.task_list_view import RichTaskListView

from .decorators import AppError, command_wrapper
from .utils import (
    DATE_FORMATS,
    load_rows,
    localize,
    make_presenter,
    make_task_service,
    row_index,
)

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()


def _check_output(output: str | None) -> str:
    output = output or get_config_service().config.output.format
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format '{output}' (choose from {', '.join(OUTPUT_FORMATS)})",
            exit_code=ERROR_INVALID_ARGS,
        )
    return output


@app.command("list")
@command_wrapper
def list_tasks(
    category: str | None = typer.Option(
        None, "--category", "-c", help="Only tasks whose category starts with this"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """List tasks, newest first."""
    output = _check_output("json" if json_opt else output)

    if output in ("pretty", "table"):
        title = "Tasks" if category is None else f"Tasks in '{category}*'"
        presenter = make_presenter(RichTaskListView(console, title=title))
        load_rows(presenter, category)
        return

    presenter = make_presenter(RichTaskListView(console, render_rows=False))
    load_rows(presenter, category)
    result = [
        {
            "row": number,
            "id": task.id,
            "title": task.title,
            "category": task.category,
            "date": task.date.isoformat(),
        }
        for number, task in enumerate(presenter.visible_tasks, start=1)
    ]
    format_output(result, output)


@app.command("add")
@command_wrapper
def add_task(
    title: str = typer.Argument("", help="Task title"),
    category: str = typer.Option("", "--category", "-c", help="Task category"),
    date: datetime | None = typer.Option(
        None, "--date", "-d", formats=DATE_FORMATS, help="Task date (default: now)"
    ),
    remind: bool = typer.Option(
        False, "--remind", help="Schedule a reminder at the task date"
    ),
) -> None:
    """Create a new task."""
    presenter = make_presenter(RichTaskListView(console, render_rows=False))
    request = presenter.prepare_new_task()
    if request is None:
        raise typer.Exit(ERROR_STORE)

    changes = {"title": title, "category": category}
    if date is not None:
        changes["date"] = localize(date, presenter.tz)
    task = Task(**{**request.task.model_dump(), **changes})

    service = make_task_service()
    try:
        service.save_task(task, remind=remind)
    except NotificationError as e:
        format_warning(f"Task saved, but the reminder could not be scheduled: {e}")
        return
    format_success(f"Task {task.id} added ({task.format_date(presenter.tz)})")


@app.command("edit")
@command_wrapper
def edit_task(
    row: int = typer.Argument(..., help="Row number as shown by 'list'"),
    search: str | None = typer.Option(
        None, "--search", "-s", help="Row numbers refer to this category search"
    ),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    category: str | None = typer.Option(None, "--category", "-c", help="New category"),
    date: datetime | None = typer.Option(
        None, "--date", "-d", formats=DATE_FORMATS, help="New date"
    ),
    remind: bool = typer.Option(
        False, "--remind", help="Schedule a reminder at the task date"
    ),
) -> None:
    """Edit the task shown at ROW."""
    presenter = make_presenter(RichTaskListView(console, render_rows=False))
    load_rows(presenter, search)
    request = presenter.select_row(row_index(presenter, row))

    if title is None and category is None and date is None and not remind:
        format_info("Nothing to change")
        return

    service = make_task_service()
    try:
        task = service.update_task(
            request.task.id,
            title=title,
            category=category,
            date=localize(date, presenter.tz),
            remind=remind,
        )
    except NotificationError as e:
        format_warning(f"Task saved, but the reminder could not be scheduled: {e}")
        return
    format_success(f"Task {task.id} updated")


@app.command("delete")
@command_wrapper
def delete_task(
    row: int = typer.Argument(..., help="Row number as shown by 'list'"),
    search: str | None = typer.Option(
        None, "--search", "-s", help="Row numbers refer to this category search"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete the task shown at ROW and cancel its reminder."""
    presenter = make_presenter(RichTaskListView(console, render_rows=False))
    load_rows(presenter, search)
    index = row_index(presenter, row)

    if not force:
        task_title, date_text = presenter.row_content(index)
        confirm = typer.confirm(f"Delete task '{task_title}' ({date_text})?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    if not presenter.delete_row(index):
        raise typer.Exit(ERROR_STORE)
