"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from taskapp_cli.repositories import StoreError, TaskNotFoundError
from taskapp_cli.services.config_service import get_config_service
from taskapp_cli.utils.exit_codes import ERROR_GENERAL, ERROR_NOT_FOUND, ERROR_STORE
from taskapp_cli.utils.logger import get_logger, set_log_level
from taskapp_cli.utils.ui.console import get_console
from taskapp_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _apply_config() -> None:
    config = get_config_service().config
    set_log_level(config.logging.level)
    get_console().no_color = not config.output.color


def command_wrapper(func: Callable) -> Callable:
    """Wrap a command with logging, timing and error-to-exit-code mapping."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        try:
            _apply_config()
            logger.info("command started: %s", cmd)
            result = func(*args, **kwargs)
            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except typer.Exit:
            # Explicit exits (including Exit(0) after a cancelled prompt)
            raise

        except AppError as e:
            logger.error(
                "command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e
            )
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except TaskNotFoundError as e:
            logger.error(
                "command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e
            )
            format_error(str(e))
            raise typer.Exit(code=ERROR_NOT_FOUND) from e

        except StoreError as e:
            logger.error(
                "command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e
            )
            format_error(f"{e}. Please try again.")
            raise typer.Exit(code=ERROR_STORE) from e

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                e,
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
