"""Configuration management commands."""

from typing import Optional

import typer

from taskapp_cli.services.config_service import get_config_service
from taskapp_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from taskapp_cli.utils.typer_helpers import SuggestingGroup
from taskapp_cli.utils.ui.console import get_console
from taskapp_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def _parse_value(value: str) -> str | int | bool | None:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    if value.lower() in ("null", "none"):
        return None
    return value


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("json", "--output", "-o", help="Output format"),
) -> None:
    """Show the current configuration."""
    format_output(get_config_service().config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., storage.backend)"),
) -> None:
    """Get a configuration value."""
    config_service = get_config_service()
    if not config_service.has_key(key):
        raise AppError(f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND)
    value = config_service.get(key)
    console.print("null" if value is None else value, highlight=False, markup=False)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., ui.timezone)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = _parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND
        ) from e
    except ValueError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_info("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(
            f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND
        ) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
