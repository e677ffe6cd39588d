"""
CLI entry point for libsift.

Uses Typer for the command-line interface.

Usage:
    libsift cluster jars.json --output libraries.json
    libsift cluster jars.json --scores scores.json --workers 4
    libsift scores jars.json --nonzero --names
    libsift resolve project.json --library-index library.json
    libsift config show
"""

from __future__ import annotations

import typer

from libsift import __version__
from libsift.cli.commands import cluster as cluster_commands
from libsift.cli.commands import resolve as resolve_commands
from libsift.cli.commands.config import app as config_app

app = typer.Typer(
    name="libsift",
    help="libsift CLI - Identify libraries in jar corpora and resolve relation FQNs",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")
app.command("cluster")(cluster_commands.cluster)
app.command("scores")(cluster_commands.scores)
app.command("resolve")(resolve_commands.resolve)


@app.command("version")
def version() -> None:
    """Print the libsift version."""
    typer.echo(__version__)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
