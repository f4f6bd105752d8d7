from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import typer
import uvicorn

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_error, render_weather


class Service(str, Enum):
    gateway = "gateway"
    weather = "weather"


_APP_FACTORIES = {
    Service.gateway: "app.gateway.main:create_app",
    Service.weather: "app.weather.main:create_app",
}

_DEFAULT_PORTS = {
    Service.gateway: 8081,
    Service.weather: 8082,
}


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for running and querying the CEP weather services.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Gateway base URL (defaults to GATEWAY_URL env or http://localhost:8081).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the gateway to answer.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("weather")
def weather_command(
    ctx: typer.Context,
    cep: str = typer.Argument(..., help="Eight digit postal code, e.g. 01001000."),
) -> None:
    """Show the current temperature for the city of a postal code."""
    state = _get_state(ctx)
    status_code, payload = state.client.lookup(cep)
    if status_code != 200:
        render_error(status_code, payload)
        raise typer.Exit(code=1)
    render_weather(payload)


@app.command("serve")
def serve_command(
    service: Service = typer.Argument(..., help="Which service to run."),
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to bind."),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to bind (gateway 8081, weather 8082 by default).",
    ),
) -> None:
    """Run one of the services with uvicorn."""
    bind_port = port if port is not None else _DEFAULT_PORTS[service]
    typer.echo(f"Starting {service.value} service on {host}:{bind_port} ...")
    uvicorn.run(_APP_FACTORIES[service], factory=True, host=host, port=bind_port)
