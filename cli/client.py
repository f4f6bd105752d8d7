from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import httpx
import typer

from app.schemas import CepSubmission
from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the gateway service."""

    def __init__(self, config: CLIConfig, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url, timeout=config.timeout, transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def lookup(self, cep: str) -> Tuple[int, Dict[str, Any]]:
        """Submit ``cep`` to the gateway and return its status and JSON body."""
        body = CepSubmission(cep=cep).model_dump()
        try:
            response = self._client.post("/cep", json=body)
        except httpx.HTTPError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text.strip()}
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        return response.status_code, payload
