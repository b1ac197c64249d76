"""Pulseboard CLI — run the server, peek at workspace statistics.

Usage:
    pulseboard serve                              # Run the API + live channel
    pulseboard stats --email me@x.io --password … # Print the current snapshot
"""

from __future__ import annotations

import asyncio
import json
import os

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:3000"


def _api_url() -> str:
    return os.environ.get("PULSEBOARD_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Pulseboard server."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _fetch_stats(email: str, password: str) -> dict:
    async with _client() as client:
        r = await client.post(
            "/api/v1/auth/login", json={"email": email, "password": password}
        )
        if r.status_code == 401:
            raise click.ClickException("Invalid credentials")
        r.raise_for_status()

        # The session cookie from the login response rides along in the client jar
        r = await client.get("/api/v1/stats")
        r.raise_for_status()
        return r.json()


def _render_stats(stats: dict) -> None:
    click.secho("Workspace", bold=True)
    click.echo(f"  Projects:   {stats['totalProjects']}")
    click.echo(f"  Tasks:      {stats['totalTasks']}")
    click.echo(f"  Completion: {stats['overallCompletion']}%")
    for p in stats["projects"]:
        click.echo(f"  - {p['name']} ({p['progress']}%)")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
def cli():
    """Pulseboard — projects, tasks and a live statistics feed."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: PULSEBOARD_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: PULSEBOARD_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the HTTP API and the /ws live channel."""
    import uvicorn

    from pulseboard.config import settings

    uvicorn.run(
        "pulseboard.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command()
@click.option("--email", required=True, envvar="PULSEBOARD_EMAIL")
@click.option("--password", required=True, envvar="PULSEBOARD_PASSWORD")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def stats(email: str, password: str, as_json: bool):
    """Print the current workspace statistics."""
    try:
        data = asyncio.run(_fetch_stats(email, password))
    except httpx.HTTPError as e:
        raise click.ClickException(f"Request failed: {e}")

    if as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        _render_stats(data)


if __name__ == "__main__":
    cli()
