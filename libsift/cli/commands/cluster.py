"""
Clustering CLI commands.

Provides commands for identifying libraries and inspecting jar scores.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from libsift.adapters.corpus import load_jar_corpus, load_scores
from libsift.cli.commands.common import load_or_exit, open_run_logger, setup, write_json
from libsift.cli.progress import create_progress_reporter
from libsift.common.logging import setup_logging_bridge, teardown_logging_bridge
from libsift.modules.clustering import (
    NameEntropyScorer,
    PrecomputedScorer,
    compute_scores,
    describe_scores,
)
from libsift.services import identification
from libsift.services.config_models import ClusteringSettings

console = Console()


def _print_identification_result(result: dict) -> None:
    """Print identification results."""
    typer.echo(f"\n{'-' * 60}")
    typer.echo("IDENTIFICATION RESULTS")
    typer.echo(f"{'-' * 60}")
    stats = result.get("stats", {})
    typer.echo(f"  Jars:             {stats.get('artifacts', 0)}")
    typer.echo(f"  Names:            {stats.get('names', 0)}")
    typer.echo(f"  Components:       {stats.get('components', 0)}")
    typer.echo(f"  Libraries:        {stats.get('libraries', 0)}")
    typer.echo(f"  Shared jars:      {stats.get('shared_artifacts', 0)}")


def cluster(
    jars: Annotated[Path, typer.Argument(help="Jar corpus JSON document")],
    scores: Annotated[
        Path | None, typer.Option("--scores", help="Precomputed scores JSON (artifact id -> score)")
    ] = None,
    workers: Annotated[
        int | None, typer.Option("--workers", min=1, help="Worker threads for scoring and clustering")
    ] = None,
    tie_break: Annotated[
        str | None, typer.Option("--tie-break", help="Order for equal scores: input_order or artifact_id")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the libraries as JSON")
    ] = None,
    limit: Annotated[int, typer.Option("--limit", help="Libraries to show in the table")] = 20,
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Debug logging")] = False,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="Disable progress bar")] = False,
) -> None:
    """Identify libraries in a jar corpus."""
    app_settings = setup(verbose)
    overrides: dict[str, object] = {}
    if workers is not None:
        overrides["score_workers"] = workers
        overrides["cluster_workers"] = workers
    if tie_break is not None:
        overrides["tie_break"] = tie_break
    try:
        settings = ClusteringSettings(**overrides)
    except ValidationError as e:
        typer.echo(f"Error: invalid option: {e}", err=True)
        raise typer.Exit(1) from e

    corpus = load_or_exit(load_jar_corpus, jars)
    precomputed = load_or_exit(load_scores, scores) if scores else None

    run_logger = open_run_logger(app_settings)
    handler = setup_logging_bridge(run_logger) if run_logger else None
    try:
        with create_progress_reporter(quiet=quiet) as progress:
            libraries, result = identification.run_identification(
                corpus,
                scores=precomputed,
                settings=settings,
                run_logger=run_logger,
                progress=progress,
            )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    finally:
        if handler:
            teardown_logging_bridge(handler)

    _print_identification_result(result)

    table = Table(title="Libraries")
    table.add_column("ID", justify="right")
    table.add_column("Jars")
    table.add_column("Seeds", justify="right")
    for library in list(libraries)[:limit]:
        table.add_row(str(library.library_id), ", ".join(library.artifact_ids), str(len(library.seeds)))
    console.print(table)
    if len(libraries) > limit:
        typer.echo(f"  ... and {len(libraries) - limit} more")

    if run_logger:
        typer.echo(f"Run log: {run_logger.get_log_path()}")
    if output:
        write_json(output, {**libraries.to_dict(), "stats": result["stats"]})


def scores(
    jars: Annotated[Path, typer.Argument(help="Jar corpus JSON document")],
    precomputed_scores: Annotated[
        Path | None, typer.Option("--scores", help="Precomputed scores JSON (artifact id -> score)")
    ] = None,
    workers: Annotated[
        int | None, typer.Option("--workers", min=1, help="Worker threads for scoring")
    ] = None,
    limit: Annotated[int, typer.Option("--limit", help="Jars to show")] = 50,
    nonzero: Annotated[
        bool, typer.Option("--nonzero", help="Only jars with a score above zero")
    ] = False,
    show_names: Annotated[bool, typer.Option("--names", help="List defined names")] = False,
) -> None:
    """Show jars ordered by distinctiveness score (lowest first)."""
    setup()
    try:
        settings = ClusteringSettings(**({"score_workers": workers} if workers else {}))
    except ValidationError as e:
        typer.echo(f"Error: invalid option: {e}", err=True)
        raise typer.Exit(1) from e

    corpus = load_or_exit(load_jar_corpus, jars)
    graph = identification.build_graph(corpus)
    if precomputed_scores:
        scorer = PrecomputedScorer(load_or_exit(load_scores, precomputed_scores))
    else:
        scorer = NameEntropyScorer(graph)
    try:
        computed = compute_scores(graph, scorer, settings.score_workers)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    table = Table(title="Jar scores")
    table.add_column("Jar")
    table.add_column("Score", justify="right")
    table.add_column("Names", justify="right" if not show_names else "left")
    for entry in describe_scores(graph, computed, limit=limit, nonzero_only=nonzero):
        names = "\n".join(entry["fqns"]) if show_names else str(len(entry["fqns"]))
        table.add_row(entry["artifact_id"], f"{entry['score']:.4f}", names)
    console.print(table)
