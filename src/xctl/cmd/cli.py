"""Command-line interface for the Xray control API.

This module provides the ``xctl`` command, handling:
- Command-line argument parsing
- Connecting to the control API
- Logging setup
- Error reporting

The CLI is built using Typer and provides commands for:
- Listing and reading traffic counters
- Adding and removing users on an inbound
- Restarting the server logger
- Generating user identifiers

Example:
    # Run from command line:
    $ xctl --port 10085 query "user>>>" --human
    $ xctl add-user vmess-in alice@example.com --level 0
"""

import time

import typer
from loguru import logger
from rich.console import Console

from xctl import __version__
from xctl.core.client import ServiceClient
from xctl.core.exceptions import ControlConnectionError
from xctl.core.result import CallResult
from xctl.core.utils.log_config import setup_logging
from xctl.core.utils.prompt import StatsUI
from xctl.core.utils.utils import DEFAULT_API_ADDRESS, DEFAULT_API_PORT, generate_uuid

console = Console()
app = typer.Typer(help="Control an Xray server through its gRPC API")


@app.callback()
def main(
    ctx: typer.Context,
    address: str = typer.Option(DEFAULT_API_ADDRESS, "--address", "-a", help="Control API host"),
    port: int = typer.Option(DEFAULT_API_PORT, "--port", "-p", help="Control API port"),
    debug: bool = typer.Option(
        default=False,
        help="Enable debug logging",
    ),
):
    """Connect to the control API of a running Xray server."""
    setup_logging(debug)
    ctx.obj = {"address": address, "port": port}


def _connect(ctx: typer.Context) -> ServiceClient:
    """Create a client from the global options, exiting on failure."""
    try:
        return ServiceClient(ctx.obj["address"], ctx.obj["port"])
    except ControlConnectionError as e:
        console.print(f"[red]Error: {e}")
        raise typer.Exit(code=1) from e


def _check(result: CallResult):
    """Return the value of ``result``, exiting with status 1 on failure."""
    if not result.ok:
        console.print(f"[red]Error: {result.error}")
        raise typer.Exit(code=1)
    return result.value


@app.command(name="version")
def show_version():
    """Show version information."""
    console.print(f"[cyan]xctl v{__version__}[/cyan]")


@app.command(name="query")
def query_stats(
    ctx: typer.Context,
    pattern: str = typer.Argument("", help="Counter name filter (empty matches all)"),
    reset: bool = typer.Option(default=False, help="Zero the counters after reading"),
    human: bool = typer.Option(False, "--human", "-H", help="Show values as byte sizes"),
    watch: float | None = typer.Option(None, "--watch", "-w", min=0.1, help="Refresh every N seconds"),
):
    """List traffic counters."""
    with _connect(ctx) as client:
        ui = StatsUI(client.target, human=human)
        stats = _check(client.try_query_stats(pattern, reset))
        if watch is None:
            console.print(ui.generate_display(stats))
            return

        try:
            with ui.create_live_display(ui.generate_display(stats)) as live:
                while True:
                    time.sleep(watch)
                    live.update(ui.generate_display(client.query_stats(pattern, reset)))
        except KeyboardInterrupt:
            logger.info("Stopped watching stats")


@app.command(name="get")
def get_stats(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Counter name, as listed by query"),
    reset: bool = typer.Option(default=False, help="Zero the counter after reading"),
):
    """Read a single traffic counter."""
    with _connect(ctx) as client:
        stat_name, value = _check(client.try_get_stats(name, reset))
    console.print(f"{stat_name} -> {value}", markup=False, highlight=False)


@app.command(name="add-user")
def add_user(
    ctx: typer.Context,
    inbound_tag: str = typer.Argument(..., help="Tag of the inbound"),
    email: str = typer.Argument(..., help="User email, used as the user key"),
    level: int = typer.Option(0, "--level", "-l", min=0, help="User level"),
    user_id: str | None = typer.Option(None, "--id", help="User UUID (generated when omitted)"),
    alter_id: int = typer.Option(0, "--alter-id", min=0, help="VMess alterId"),
):
    """Add a VMess user to an inbound until the server restarts."""
    if user_id is None:
        user_id = generate_uuid()
    with _connect(ctx) as client:
        _check(client.try_add_user(inbound_tag, email, level, user_id, alter_id))
    console.print(f"[green]Added {email} to {inbound_tag}")
    console.print(user_id, markup=False, highlight=False)


@app.command(name="remove-user")
def remove_user(
    ctx: typer.Context,
    inbound_tag: str = typer.Argument(..., help="Tag of the inbound"),
    email: str = typer.Argument(..., help="Email of the user to remove"),
):
    """Remove a user from an inbound until the server restarts."""
    with _connect(ctx) as client:
        _check(client.try_remove_user(inbound_tag, email))
    console.print(f"[green]Removed {email} from {inbound_tag}")


@app.command(name="restart-logger")
def restart_logger(ctx: typer.Context):
    """Restart the server's logger."""
    with _connect(ctx) as client:
        _check(client.try_restart_logger())
    console.print("[green]Logger restarted")


@app.command(name="uuid")
def new_uuid():
    """Print a fresh user identifier."""
    console.print(generate_uuid(), markup=False, highlight=False)


if __name__ == "__main__":
    app()
