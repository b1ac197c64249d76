"""CLI tests — the stats command against a mocked HTTP server."""

import httpx
import pytest
from click.testing import CliRunner

from pulseboard.cli import main as cli_main

STATS = {
    "totalProjects": 2,
    "totalTasks": 4,
    "overallCompletion": 75,
    "projects": [
        {"id": "1", "name": "Website", "description": None, "progress": 0},
        {"id": "2", "name": "Mobile", "description": "app", "progress": 0},
    ],
}


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/v1/auth/login":
        if b"right-password" not in request.content:
            return httpx.Response(401, json={"detail": "Invalid credentials"})
        return httpx.Response(
            200,
            json={"user_id": "u-1", "name": "Ada", "email": "ada@example.com"},
            headers={"Set-Cookie": "token=abc123; Path=/; HttpOnly"},
        )
    if request.url.path == "/api/v1/stats":
        if "token=abc123" not in request.headers.get("cookie", ""):
            return httpx.Response(401, json={"detail": "Authentication required"})
        return httpx.Response(200, json=STATS)
    return httpx.Response(404)


@pytest.fixture(autouse=True)
def mock_server(monkeypatch):
    monkeypatch.setattr(
        cli_main,
        "_client",
        lambda: httpx.AsyncClient(
            transport=httpx.MockTransport(_handler), base_url="http://pulseboard.test"
        ),
    )


def test_stats_renders_summary():
    result = CliRunner().invoke(
        cli_main.cli, ["stats", "--email", "ada@example.com", "--password", "right-password"]
    )
    assert result.exit_code == 0, result.output
    assert "Projects:   2" in result.output
    assert "Completion: 75%" in result.output
    assert "- Website (0%)" in result.output


def test_stats_json():
    result = CliRunner().invoke(
        cli_main.cli,
        ["stats", "--email", "ada@example.com", "--password", "right-password", "--json"],
    )
    assert result.exit_code == 0, result.output
    assert '"totalTasks": 4' in result.output


def test_stats_bad_credentials():
    result = CliRunner().invoke(
        cli_main.cli, ["stats", "--email", "ada@example.com", "--password", "nope"]
    )
    assert result.exit_code != 0
    assert "Invalid credentials" in result.output
