"""Main entry point for taskapp."""

import typer

from taskapp_cli import __version__
from taskapp_cli.commands import browse, config, reminders, tasks
from taskapp_cli.utils.typer_helpers import SuggestingGroup
from taskapp_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="taskapp",
    cls=SuggestingGroup,
    help="A single-screen to-do list for the terminal",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")

# Top-level shortcuts for the everyday task commands
app.command("list")(tasks.list_tasks)
app.command("add")(tasks.add_task)
app.command("edit")(tasks.edit_task)
app.command("delete")(tasks.delete_task)
app.command("browse")(browse.browse)
app.command("reminders")(reminders.reminders)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]taskapp[/bold] version [cyan]{__version__}[/cyan]")


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
