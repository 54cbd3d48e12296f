"""Task management commands."""

from typing import Annotated

import typer

from todo_mvp.models import TaskFilterType
from todo_mvp.services.context_manager import task_service_scope
from todo_mvp.utils import exit_codes
from todo_mvp.utils.ui.console import get_console
from todo_mvp.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_info,
    format_output,
    format_success,
    format_tasks_table,
    get_completion_color,
    get_progress_bar,
)

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Task management commands", no_args_is_help=True)
console = get_console()

_EMPTY_MESSAGES = {
    TaskFilterType.ALL: "You have no tasks!",
    TaskFilterType.ACTIVE: "You have no active tasks!",
    TaskFilterType.COMPLETED: "You have no completed tasks!",
}

_FILTER_LABELS = {
    TaskFilterType.ALL: "All tasks",
    TaskFilterType.ACTIVE: "Active tasks",
    TaskFilterType.COMPLETED: "Completed tasks",
}

OutputOption = Annotated[
    str, typer.Option("--output", "-o", help=f"Output format ({', '.join(OUTPUT_FORMATS)})")
]


def _check_output(output: str) -> None:
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format '{output}'", exit_codes.ERROR_INVALID_ARGS
        )


@app.command("list")
@command_wrapper
async def list_tasks(
    filter_type: Annotated[
        TaskFilterType,
        typer.Option("--filter", "-f", help="Which tasks to show", case_sensitive=False),
    ] = TaskFilterType.ALL,
    refresh: Annotated[
        bool, typer.Option("--refresh", help="Reload tasks from the remote store")
    ] = False,
    output: OutputOption = "table",
) -> None:
    """List tasks."""
    _check_output(output)
    async with task_service_scope() as service:
        tasks = await service.load_tasks(filter_type, force_update=refresh)

    if output != "table":
        format_output([task.model_dump() for task in tasks], output)
        return
    if not tasks:
        format_info(_EMPTY_MESSAGES[filter_type])
        return
    format_tasks_table([task.model_dump() for task in tasks], _FILTER_LABELS[filter_type])


@app.command("show")
@command_wrapper
async def show_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    output: OutputOption = "table",
) -> None:
    """Show task details."""
    _check_output(output)
    async with task_service_scope() as service:
        task = await service.get_task(task_id)
    format_output(task.model_dump(), output)


@app.command("add")
@command_wrapper
async def add_task(
    title: Annotated[str, typer.Argument(help="Task title")] = "",
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Task description")
    ] = None,
    output: OutputOption = "table",
) -> None:
    """Create a new task."""
    _check_output(output)
    async with task_service_scope() as service:
        task = await service.add_task(title or None, description)

    if output == "table":
        format_success(f"Task saved: {task.title_for_list}")
        console.print(f"[dim]ID: {task.id}[/dim]")
    else:
        format_output(task.model_dump(), output)


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
    title: Annotated[str | None, typer.Option("--title", "-t", help="New title")] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="New description")
    ] = None,
) -> None:
    """Edit the title or description of a task."""
    if title is None and description is None:
        raise AppError(
            "Nothing to update: pass --title and/or --description",
            exit_codes.ERROR_INVALID_ARGS,
        )
    async with task_service_scope() as service:
        task = await service.update_task(task_id, title=title, description=description)
    format_success(f"Task updated: {task.title_for_list}")


@app.command("complete")
@command_wrapper
async def complete_tasks(
    task_ids: Annotated[list[str], typer.Argument(help="Task ID(s)")],
) -> None:
    """Mark one or more tasks as completed."""
    async with task_service_scope() as service:
        for task_id in task_ids:
            task = await service.complete_task(task_id)
            format_success(f"Task marked complete: {task.title_for_list}")


@app.command("activate")
@command_wrapper
async def activate_tasks(
    task_ids: Annotated[list[str], typer.Argument(help="Task ID(s)")],
) -> None:
    """Mark one or more completed tasks as active."""
    async with task_service_scope() as service:
        for task_id in task_ids:
            task = await service.activate_task(task_id)
            format_success(f"Task marked active: {task.title_for_list}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID")],
) -> None:
    """Delete a task."""
    async with task_service_scope() as service:
        task = await service.delete_task(task_id)
    format_success(f"Task deleted: {task.title_for_list}")


@app.command("clear-completed")
@command_wrapper
async def clear_completed() -> None:
    """Delete all completed tasks."""
    async with task_service_scope() as service:
        count = await service.clear_completed_tasks()
    format_success(f"Completed tasks cleared ({count})")


@app.command("purge")
@command_wrapper
async def purge_tasks(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete every task from the local and remote stores."""
    if not yes:
        raise AppError(
            "Refusing to delete all tasks without --yes", exit_codes.ERROR_INVALID_ARGS
        )
    async with task_service_scope() as service:
        await service.delete_all_tasks()
    format_success("All tasks deleted")


@app.command("stats")
@command_wrapper
async def show_statistics(output: OutputOption = "table") -> None:
    """Show active/completed task statistics."""
    _check_output(output)
    async with task_service_scope() as service:
        stats = await service.get_statistics()

    if output != "table":
        format_output(stats.model_dump(), output)
        return
    if stats.total == 0:
        format_info("You have no tasks.")
        return

    color = get_completion_color(stats.completed_percent)
    console.print(f"Active tasks: [bold]{stats.active}[/bold]")
    console.print(f"Completed tasks: [bold]{stats.completed}[/bold]")
    console.print(
        f"[{color}]{get_progress_bar(stats.completed_percent)}[/{color}] "
        f"{stats.completed_percent:.0f}% done"
    )
