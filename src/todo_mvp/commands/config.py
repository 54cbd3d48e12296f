"""Configuration management commands."""

from typing import Annotated

import typer

from todo_mvp.services.config_service import get_config_service
from todo_mvp.utils import exit_codes
from todo_mvp.utils.ui.console import get_console
from todo_mvp.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands", no_args_is_help=True)
console = get_console()


def _parse_value(value: str) -> str | int | float | bool | None:
    """Convert a command-line string to the most likely config type."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("none", "null"):
        return None
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


@app.command("view")
@command_wrapper
def view_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "yaml",
) -> None:
    """View current configuration."""
    format_output(get_config_service().config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., remote.endpoint)")],
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        raise AppError(f"Configuration key '{key}' not set", exit_codes.ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., remote.type)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    parsed_value = _parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        raise AppError(
            f"Unknown configuration key '{key}'", exit_codes.ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[str | None, typer.Argument(help="Configuration key to reset")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        target = f"'{key}'" if key else "all configuration"
        if not typer.confirm(f"Reset {target} to defaults?"):
            raise typer.Exit(exit_codes.SUCCESS)
    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(
            f"Unknown configuration key '{key}'", exit_codes.ERROR_INVALID_ARGS
        ) from e
    format_success("Configuration reset to defaults")
