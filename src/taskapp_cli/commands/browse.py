"""Browse command - interactive task list session.

One presenter instance lives for the whole session. Editing hands the task to
a prompt-driven editor; the list is re-derived from the store when the
editor returns.
"""

from datetime import datetime

import typer

from taskapp_cli.models import ROW_DATE_FORMAT, EditRequest, Task
from taskapp_cli.repositories import NotificationError
from taskapp_cli.services.task_list_presenter import TaskListPresenter, TaskNavigator
from taskapp_cli.services.task_service import TaskService
from taskapp_cli.utils.ui.console import get_console
from taskapp_cli.utils.ui.formatters import format_error, format_success, format_warning
from taskapp_cli.utils.ui.task_list_view import RichTaskListView

from .decorators import command_wrapper
from .utils import DATE_FORMATS, localize, make_presenter, make_task_service

console = get_console()

HELP_TEXT = """\
[bold]Commands[/bold]
  [cyan]s PREFIX[/cyan]  search by category prefix
  [cyan]c[/cyan]         cancel search
  [cyan]n[/cyan]         new task
  [cyan]e ROW[/cyan]     edit task
  [cyan]d ROW[/cyan]     delete task
  [cyan]r[/cyan]         refresh
  [cyan]q[/cyan]         quit"""


def _parse_date(text: str) -> datetime | None:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


class PromptEditor(TaskNavigator):
    """Edit flow that prompts for each field and saves through TaskService."""

    def __init__(self, service: TaskService, tz=None):
        self.service = service
        self.tz = tz

    def open_editor(self, request: EditRequest) -> None:
        task = request.task
        heading = "New task" if request.is_new else f"Edit task {task.id}"
        console.print(f"[bold]{heading}[/bold]")

        title = typer.prompt("Title", default=task.title)
        category = typer.prompt("Category", default=task.category)
        date_text = typer.prompt("Date", default=task.format_date(self.tz))
        date = _parse_date(date_text)
        if date is None:
            format_error(f"Unrecognised date '{date_text}'; nothing saved")
            return
        if date.strftime(ROW_DATE_FORMAT) == task.format_date(self.tz):
            date = task.date
        else:
            date = localize(date, self.tz)
        remind = typer.confirm("Remind me at this time?", default=False)

        updated = Task(id=task.id, title=title, category=category, date=date)
        try:
            self.service.save_task(updated, remind=remind)
        except NotificationError as e:
            format_warning(f"Task saved, but the reminder could not be scheduled: {e}")
            return
        format_success(f"Saved task {updated.id}")


def _row_argument(presenter: TaskListPresenter, argument: str) -> int | None:
    if not argument.isdigit() or not 1 <= int(argument) <= presenter.row_count():
        format_error(f"No row '{argument}' (the list has {presenter.row_count()} rows)")
        return None
    return int(argument) - 1


def run_session(presenter: TaskListPresenter) -> None:
    """Read and dispatch commands until the user quits."""
    presenter.load_all()
    console.print(HELP_TEXT)

    while True:
        line = typer.prompt(">", default="", show_default=False).strip()
        command, _, argument = line.partition(" ")
        argument = argument.strip()

        if command in ("q", "quit", "exit"):
            return
        if command in ("", "?", "h", "help"):
            console.print(HELP_TEXT)
        elif command == "s":
            presenter.view.title = f"Tasks in '{argument}*'"
            presenter.search(argument)
        elif command == "c":
            presenter.cancel_search()
        elif command == "r":
            presenter.view_will_appear()
        elif command == "n":
            if presenter.prepare_new_task() is not None:
                presenter.view_will_appear()
        elif command == "e":
            index = _row_argument(presenter, argument)
            if index is not None:
                presenter.select_row(index)
                presenter.view_will_appear()
        elif command == "d":
            index = _row_argument(presenter, argument)
            if index is not None:
                title, _ = presenter.row_content(index)
                if typer.confirm(f"Delete task '{title}'?"):
                    presenter.delete_row(index)
        else:
            format_error(f"Unknown command '{command}' (type ? for help)")


@command_wrapper
def browse() -> None:
    """Browse, search, edit and delete tasks interactively."""
    view = RichTaskListView(console)
    presenter = make_presenter(view)
    presenter.navigator = PromptEditor(make_task_service(), tz=presenter.tz)
    try:
        run_session(presenter)
    except (KeyboardInterrupt, EOFError, typer.Abort):
        console.print()
    console.print("[dim]Bye.[/dim]")
