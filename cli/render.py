from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer

_STATUS_COLORS = {
    "online": typer.colors.GREEN,
    "warning": typer.colors.YELLOW,
    "offline": typer.colors.RED,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_devices(devices: List[Dict[str, Any]]) -> None:
    echo_heading("Devices")
    if not devices:
        typer.echo("No devices registered.")
        return
    for device in devices:
        status = str(device.get("status"))
        typer.echo(f"  [{device.get('id')}] {device.get('name')} ({device.get('site')}) ", nl=False)
        typer.secho(status, fg=_STATUS_COLORS.get(status))


def render_readings(device_id: int, readings: List[Dict[str, Any]]) -> None:
    echo_heading(f"Readings for device {device_id}")
    if not readings:
        typer.echo("No readings recorded.")
        return
    for reading in readings:
        typer.echo(
            f"  - {reading.get('timestamp')}  {reading.get('powerUsageKw')} kW  ({reading.get('id')})"
        )


def render_reading(payload: Dict[str, Any]) -> None:
    echo_heading("Reading")
    echo_key_values(
        [
            ("id", payload.get("id")),
            ("deviceId", payload.get("deviceId")),
            ("timestamp", payload.get("timestamp")),
            ("powerUsageKw", payload.get("powerUsageKw")),
        ]
    )
