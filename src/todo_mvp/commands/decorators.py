"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import httpx
import typer
from pydantic import ValidationError

from todo_mvp.exceptions import EmptyTaskError, TaskNotFoundError
from todo_mvp.utils import exit_codes
from todo_mvp.utils.logger import get_logger
from todo_mvp.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _to_app_error(error: Exception) -> AppError | None:
    """Map known domain and transport errors to an AppError."""
    if isinstance(error, TaskNotFoundError):
        return AppError(str(error), exit_codes.ERROR_NOT_FOUND)
    if isinstance(error, (EmptyTaskError, ValidationError)):
        return AppError(str(error), exit_codes.ERROR_INVALID_ARGS)
    if isinstance(error, httpx.HTTPError):
        return AppError(f"Remote store error: {error}", exit_codes.ERROR_NETWORK)
    return None


def command_wrapper(func: Callable):
    """Run a sync or async command with logging and error-to-exit-code mapping."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            app_error = e if isinstance(e, AppError) else _to_app_error(e)
            if app_error is not None:
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s",
                    cmd,
                    elapsed,
                    exit_codes.get_exit_code_name(app_error.exit_code),
                    str(e),
                )
                format_error(str(app_error))
                raise typer.Exit(code=app_error.exit_code) from e

            logger.error(
                "command failed: %s (%.3fs) [%s] - %s\n%s",
                cmd,
                elapsed,
                exit_codes.get_exit_code_name(exit_codes.ERROR_GENERAL),
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
