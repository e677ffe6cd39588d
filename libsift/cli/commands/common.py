"""Helpers shared by CLI commands."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

import typer
from pydantic import ValidationError

from libsift.common.logging import RunLogger, configure_logging
from libsift.services.config_models import AppSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def setup(verbose: bool = False) -> AppSettings:
    """Configure console logging from settings and return them."""
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    return settings


def open_run_logger(settings: AppSettings) -> RunLogger | None:
    if not settings.run_log:
        return None
    run_id = datetime.now().strftime("%Y%m%d%H%M%S%f")
    return RunLogger(run_id=run_id, logs_dir=settings.log_dir)


def load_or_exit(loader: Callable[[Path], T], path: Path) -> T:
    """Run a loader; report unreadable or malformed input and exit with code 1."""
    try:
        return loader(path)
    except OSError as e:
        typer.echo(f"Error: cannot read {path}: {e}", err=True)
        raise typer.Exit(1) from e
    except ValidationError as e:
        typer.echo(f"Error: invalid document {path}:\n{e}", err=True)
        raise typer.Exit(1) from e


def write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    typer.echo(f"Wrote {path}")
