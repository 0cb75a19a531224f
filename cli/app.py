from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_write


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Send weather readings to the ingest service.",
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
        help="Ingest API base URL (defaults to API_BASE_URL env or http://localhost:6969).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the server to acknowledge the write.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("send")
def send_command(
    ctx: typer.Context,
    location: str = typer.Option(..., "--location", "-l", help="Location tag for the reading."),
    temperature: float = typer.Option(..., "--temperature", "-t", help="Temperature value."),
    humidity: float = typer.Option(..., "--humidity", "-H", help="Relative humidity value."),
) -> None:
    """Post a single reading and report the store acknowledgement."""
    state = _get_state(ctx)
    typer.echo(f"Sending reading for {location} to {state.config.base_url} ...")
    payload = state.client.send_reading(location, temperature, humidity)
    render_write(
        {"location": location, "temperature": temperature, "humidity": humidity},
        payload,
    )
