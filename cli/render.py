from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_weather(payload: Dict[str, Any]) -> None:
    echo_heading(f"Weather in {payload.get('city')}")
    echo_key_values(
        [
            ("celsius", payload.get("temp_C")),
            ("fahrenheit", payload.get("temp_F")),
            ("kelvin", payload.get("temp_K")),
        ]
    )


def render_error(status_code: int, payload: Dict[str, Any]) -> None:
    message = payload.get("message") or "no detail provided."
    typer.secho(f"Request failed with status {status_code}: {message}", fg=typer.colors.RED, err=True)
