"""Reminders command - inspect and deliver pending task reminders."""

from datetime import UTC, datetime

import typer
from rich.markup import escape

from taskapp_cli.models import ROW_DATE_FORMAT
from taskapp_cli.repositories import NotificationError
from taskapp_cli.services.config_service import (
    get_config_service,
    get_storage_strategy_context,
)
from taskapp_cli.utils.exit_codes import ERROR_STORE
from taskapp_cli.utils.ui.console import get_console
from taskapp_cli.utils.ui.formatters import format_error, format_output

from .decorators import command_wrapper

console = get_console()


def _as_dict(notification, tz) -> dict:
    return {
        "task": notification.identifier,
        "title": notification.title,
        "category": notification.body,
        "fire_at": notification.fire_at.astimezone(tz).strftime(ROW_DATE_FORMAT),
    }


@command_wrapper
def reminders(
    deliver: bool = typer.Option(
        False, "--deliver", help="Print due reminders and remove them"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List pending reminders, or deliver the ones that are due."""
    config = get_config_service().config
    center = get_storage_strategy_context().notification_center
    tz = config.ui.tzinfo()

    try:
        if deliver:
            notifications = center.deliver_due(datetime.now(UTC))
        else:
            notifications = center.list_pending()
    except NotificationError as e:
        format_error(f"Could not read reminders: {e}")
        raise typer.Exit(ERROR_STORE) from e

    if deliver:
        if not notifications:
            console.print("[dim]No reminders due[/dim]")
        for notification in notifications:
            console.print(
                f"[bold yellow]Reminder:[/bold yellow] {escape(notification.title)}"
                f" [dim]({_as_dict(notification, tz)['fire_at']})[/dim]"
            )
        return

    format_output(
        [_as_dict(n, tz) for n in notifications], output or config.output.format
    )
