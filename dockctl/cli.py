#!/usr/bin/env python

import typer
from typing import Optional
from rich.console import Console
from rich.markup import escape

from dockctl import __version__, logger, set_log_level
from dockctl.config import Settings, load_settings
from dockctl.dispatch import (
    Dispatcher,
    InspectContainer,
    KillContainer,
    ListImages,
    ListRunningContainers,
    Request,
)
from dockctl.errors import DockctlError, RuntimeConnectionError
from dockctl.render import TableRenderer
from dockctl.runtime import RuntimeClient

app = typer.Typer(
    name="dockctl",
    help="Inspect and control the local Docker runtime.",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)
img_app = typer.Typer(help="Working with Docker Images", no_args_is_help=True)
ps_app = typer.Typer(help="Show Docker Processes", no_args_is_help=True)
app.add_typer(img_app, name="img")
app.add_typer(ps_app, name="ps")

console = Console()

DEBUG_LEVELS = {1: "INFO", 2: "DEBUG"}


def _version_callback(value: bool):
    if value:
        console.print(f"dockctl {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "--config", "-c", metavar="FILE", help="Sets a custom config file."),
    debug: int = typer.Option(0, "--debug", "-d", count=True, help="Turn debugging information on (repeat for more)."),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version."),
):
    """Inspect and control the local Docker runtime."""
    try:
        settings = load_settings(config)
    except DockctlError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1)

    level = DEBUG_LEVELS.get(min(debug, 2), settings.log_level)
    set_log_level(level)
    logger.debug(f"Settings: {settings}")
    ctx.obj = settings


def run_request(ctx: typer.Context, request: Request):
    """Connects to Docker, dispatches one request and maps failures to exit code 1."""
    settings: Settings = ctx.obj if isinstance(ctx.obj, Settings) else Settings()
    runtime = RuntimeClient(settings)
    try:
        runtime.connect()
        return Dispatcher(runtime, TableRenderer(console)).dispatch(request)
    except RuntimeConnectionError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        console.print("Please ensure Docker is running and accessible, or DOCKER_HOST is set correctly.")
        raise typer.Exit(code=1)
    except DockctlError as e:
        logger.error(f"CLI: {type(request).__name__} failed: {e}")
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1)
    finally:
        runtime.close()


@img_app.command("list", help="List All OCI Images")
def list_images_command(ctx: typer.Context):
    """Lists every image on disk, including untagged intermediates."""
    run_request(ctx, ListImages())


@ps_app.command("info", help="All Running Containers")
def running_containers_command(ctx: typer.Context):
    run_request(ctx, ListRunningContainers())


@ps_app.command("kill", help="Kill A Running Containers Process")
def kill_container_command(
    ctx: typer.Context,
    container_name: str = typer.Argument(..., help="Container Name of the Docker Container"),
):
    """Sends SIGTERM to the named container."""
    outcome = run_request(ctx, KillContainer(container_name))
    if not outcome.acknowledged:
        raise typer.Exit(code=1)


@ps_app.command("inspect", help="Show details of one container")
def inspect_container_command(
    ctx: typer.Context,
    container_name: str = typer.Argument(..., help="Container Name of the Docker Container"),
):
    run_request(ctx, InspectContainer(container_name))


if __name__ == "__main__":
    app()
