from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest
from typer.testing import CliRunner

from cli.app import app


class StubClient:
    def __init__(self, config, status_code: int = 200, payload: Dict[str, Any] | None = None) -> None:
        self.config = config
        self.status_code = status_code
        self.payload = payload or {
            "city": "São Paulo",
            "temp_C": 25.0,
            "temp_F": 77.0,
            "temp_K": 298.0,
        }
        self.lookups: List[str] = []
        self.closed = False

    def lookup(self, cep: str) -> Tuple[int, Dict[str, Any]]:
        self.lookups.append(cep)
        return self.status_code, self.payload

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_weather_command_renders_temperatures(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["--base-url", "http://gateway:8081/", "weather", "01001000"])

    assert result.exit_code == 0
    assert "Weather in São Paulo" in result.stdout
    assert "fahrenheit: 77.0" in result.stdout
    assert stub.lookups == ["01001000"]
    assert stub.config.base_url == "http://gateway:8081"
    assert stub.closed is True


def test_weather_command_reports_errors(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None, status_code=404, payload={"message": "can not find zipcode"})
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["weather", "00000000"])

    assert result.exit_code == 1
    assert "Request failed with status 404: can not find zipcode" in result.output
    assert stub.closed is True


def test_serve_command_runs_selected_factory(monkeypatch, runner: CliRunner) -> None:
    calls: List[Tuple[str, Dict[str, Any]]] = []
    monkeypatch.setattr("cli.app.uvicorn.run", lambda target, **kwargs: calls.append((target, kwargs)))

    result = runner.invoke(app, ["serve", "weather"])

    assert result.exit_code == 0
    assert calls == [
        ("app.weather.main:create_app", {"factory": True, "host": "0.0.0.0", "port": 8082})
    ]


def test_serve_command_honours_port(monkeypatch, runner: CliRunner) -> None:
    calls: List[Tuple[str, Dict[str, Any]]] = []
    monkeypatch.setattr("cli.app.uvicorn.run", lambda target, **kwargs: calls.append((target, kwargs)))

    result = runner.invoke(app, ["serve", "gateway", "--port", "9000"])

    assert result.exit_code == 0
    assert calls[0][0] == "app.gateway.main:create_app"
    assert calls[0][1]["port"] == 9000
