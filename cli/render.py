from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_write(reading: Dict[str, Any], payload: Dict[str, Any]) -> None:
    typer.secho(payload.get("message", "Data written."), fg=typer.colors.GREEN, bold=True)
    echo_key_values(
        [
            ("location", reading.get("location")),
            ("temperature", reading.get("temperature")),
            ("humidity", reading.get("humidity")),
        ]
    )
