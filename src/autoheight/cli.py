"""Typer CLI for autoheight."""

from __future__ import annotations

import json
import platform
from typing import Any

import typer

from autoheight.config import load_settings
from autoheight.core.app import build_context
from autoheight.core.measure import measure as measure_text
from autoheight.host.memory import MemoryHost
from autoheight.logging import configure_logging

app = typer.Typer(no_args_is_help=True)


def _read_text(text: str | None) -> str:
    if text is None:
        text = typer.get_text_stream("stdin").read()
        if text.endswith("\n"):
            text = text[:-1]
    return text


def _region(host: MemoryHost) -> dict[str, Any]:
    return {"height": host.get_region_height(), **host.options}


@app.command()
def doctor() -> None:
    """Print environment diagnostics."""

    settings = load_settings()
    configure_logging(settings)
    info = {
        "python": platform.python_version(),
        "platform": platform.platform(),
        "paths": {
            "home": str(settings.paths.base_dir),
            "logs": str(settings.paths.logs_dir),
        },
    }
    typer.echo(json.dumps(info, indent=2))


@app.command()
def settings(key: str | None = typer.Argument(None)) -> None:
    """Display current settings or a specific section."""

    data = load_settings().model_dump()
    if key:
        data = data.get(key, {})
    typer.echo(json.dumps(data, indent=2, default=str))


@app.command()
def measure(
    text: str | None = typer.Argument(None, help="Message text; read from stdin when omitted."),
    columns: int = typer.Option(80, min=1),
    echospace: int = typer.Option(68, min=0),
    height: int = typer.Option(1, min=1, help="Current region height."),
) -> None:
    """Show how many rows a message needs."""

    result = measure_text(_read_text(text), columns, echospace, height)
    typer.echo(
        json.dumps(
            {"required_rows": result.required_rows, "override_needed": result.override_needed},
            indent=2,
        )
    )


@app.command()
def simulate(
    text: str | None = typer.Argument(None, help="Message text; read from stdin when omitted."),
    columns: int = typer.Option(80, min=1),
    echospace: int = typer.Option(68, min=0),
    height: int = typer.Option(1, min=1, help="Baseline region height."),
) -> None:
    """Run one message through the manager against an in-memory editor."""

    settings = load_settings()
    configure_logging(settings)
    host = MemoryHost(columns=columns, echospace=echospace, region_height=height)
    ctx = build_context(settings, host)

    steps: list[dict[str, Any]] = [{"step": "before", **_region(host)}]
    ctx.printed(_read_text(text))
    steps.append({"step": "printed", **_region(host)})

    host.advance(settings.height.duration)
    steps.append({"step": "timer", **_region(host)})
    if host.key_subscribed:
        host.feed_key()
        host.run_pending()
        steps.append({"step": "key", **_region(host)})

    ctx.stop()
    typer.echo(json.dumps(steps, indent=2))
