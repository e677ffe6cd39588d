"""
Resolution CLI commands.

Provides the relation import command for one project.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from libsift.adapters.corpus import load_library_index, load_project
from libsift.adapters.storage import InMemorySink
from libsift.cli.commands.common import load_or_exit, open_run_logger, setup, write_json
from libsift.cli.progress import create_progress_reporter
from libsift.common.logging import setup_logging_bridge, teardown_logging_bridge
from libsift.services import relations
from libsift.services.config_models import ResolutionSettings


def _print_import_result(result: dict) -> None:
    """Print relation import results."""
    typer.echo(f"\n{'-' * 60}")
    typer.echo("RELATION IMPORT RESULTS")
    typer.echo(f"{'-' * 60}")
    stats = result.get("stats", {})
    typer.echo(f"  Project:            {stats.get('project', '')}")
    typer.echo(f"  Internal entities:  {stats.get('internal_entities', 0)}")
    typer.echo(f"  Relations:          {stats.get('relations_processed', 0)}")
    typer.echo(f"  Imported:           {stats.get('relations_imported', 0)}")
    typer.echo(f"  Rejected:           {stats.get('relations_rejected', 0)}")
    typer.echo(f"  Unknown entities:   {stats.get('unknown_entities', 0)}")

    if result.get("warnings"):
        typer.echo(f"\nWarnings ({len(result['warnings'])}):")
        for warn in result["warnings"][:5]:
            typer.echo(f"  - {warn}")
        if len(result["warnings"]) > 5:
            typer.echo(f"  ... and {len(result['warnings']) - 5} more")


def resolve(
    project: Annotated[Path, typer.Argument(help="Project extraction JSON document")],
    library_index: Annotated[
        Path, typer.Option("--library-index", "-l", help="Library index JSON document")
    ],
    unknown_id_start: Annotated[
        int | None, typer.Option("--unknown-id-start", min=0, help="First id for unknown entities")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the resolved relations as JSON")
    ] = None,
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Debug logging")] = False,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="Disable progress bar")] = False,
) -> None:
    """Resolve and import the relations of one project."""
    app_settings = setup(verbose)
    overrides: dict[str, object] = {}
    if unknown_id_start is not None:
        overrides["unknown_id_start"] = unknown_id_start
    try:
        settings = ResolutionSettings(**overrides)
    except ValidationError as e:
        typer.echo(f"Error: invalid option: {e}", err=True)
        raise typer.Exit(1) from e

    extraction = load_or_exit(load_project, project)
    index_document = load_or_exit(load_library_index, library_index)

    run_logger = open_run_logger(app_settings)
    handler = setup_logging_bridge(run_logger) if run_logger else None
    sink = InMemorySink()
    try:
        index = relations.build_library_index(index_document)
        with create_progress_reporter(quiet=quiet) as progress:
            _, result = relations.run_relation_import(
                extraction,
                index,
                settings=settings,
                sink=sink,
                run_logger=run_logger,
                progress=progress,
            )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    finally:
        if handler:
            teardown_logging_bridge(handler)

    _print_import_result(result)
    if run_logger:
        typer.echo(f"Run log: {run_logger.get_log_path()}")
    if output:
        write_json(output, {**sink.to_dict(), "stats": result["stats"]})
