"""
Config CLI commands.

Shows the effective settings (environment and .env applied).
"""

from __future__ import annotations

import json

import typer

from libsift.services.config_models import LibsiftSettings

app = typer.Typer(name="config", help="Inspect configuration")


@app.command("show")
def show_config(
    as_json: bool = typer.Option(False, "--json", help="Print as JSON"),
) -> None:
    """Show effective settings."""
    settings = LibsiftSettings().to_dict()
    if as_json:
        typer.echo(json.dumps(settings, indent=2))
        return
    for section, values in settings.items():
        typer.echo(f"[{section}]")
        for key, value in values.items():
            typer.echo(f"  {key} = {value}")
