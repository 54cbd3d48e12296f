"""Main entry point for the todo-mvp CLI."""

import typer

from todo_mvp import __version__
from todo_mvp.commands import config, tasks
from todo_mvp.services.config_service import get_config_service
from todo_mvp.utils.ui.console import get_console

app = typer.Typer(
    name="todo-mvp",
    help="Manage tasks kept in a local vault and synchronised with a remote store",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version and storage information."""
    console.print(f"[bold]todo-mvp[/bold] version [cyan]{__version__}[/cyan]")
    remote = get_config_service().config.remote
    if remote.type == "http":
        console.print(f"[dim]Remote store: {remote.endpoint}[/dim]")
    else:
        console.print("[dim]Remote store: in-memory[/dim]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
