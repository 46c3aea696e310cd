from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_devices, render_reading, render_readings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the telemetry dashboard API.",
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
        help="Telemetry API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, http_timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("devices")
def devices_command(ctx: typer.Context) -> None:
    """List devices with their current status."""
    state = _get_state(ctx)
    render_devices(state.client.list_devices())


@app.command("readings")
def readings_command(
    ctx: typer.Context,
    device_id: int = typer.Argument(..., help="Device identifier."),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Maximum number of readings (server default is 20).",
    ),
) -> None:
    """Show the newest readings for a device."""
    state = _get_state(ctx)
    render_readings(device_id, state.client.list_readings(device_id, limit=limit))


@app.command("record")
def record_command(
    ctx: typer.Context,
    device_id: int = typer.Argument(..., help="Device identifier."),
    power_usage_kw: float = typer.Argument(..., help="Power usage in kilowatts."),
    timestamp: Optional[str] = typer.Option(
        None,
        "--timestamp",
        "-t",
        help="ISO-8601 timestamp; defaults to the server's current time.",
    ),
) -> None:
    """Record a new power-usage reading."""
    state = _get_state(ctx)
    payload = state.client.create_reading(device_id, power_usage_kw, timestamp)
    typer.secho(f"Reading recorded. id={payload.get('id')}", fg=typer.colors.GREEN)
    render_reading(payload)
