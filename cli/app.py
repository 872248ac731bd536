from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_changes, render_current, render_export_lines


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Read heating status from a running EMS dashboard service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Dashboard base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Show the current value of every sensor, grouped like the dashboard."""
    state = _get_state(ctx)
    render_current(state.client.get_current())


@app.command("activity")
def activity_command(
    ctx: typer.Context,
    day: int = typer.Option(0, "--day", "-d", max=0, help="Day offset, 0 is today and -1 yesterday."),
) -> None:
    """Show how much the burner and hot-water counters increased on a day."""
    state = _get_state(ctx)
    render_changes(state.client.get_changes(day))


@app.command("export")
def export_command(ctx: typer.Context) -> None:
    """Print the Name=value lines served to the home-automation integration."""
    state = _get_state(ctx)
    render_export_lines(state.client.get_export())
