"""
Run logs for clustering and relation import runs.

Every run appends JSON objects, one per line, to
``<logs_dir>/run_<id>/log_<datetime>.jsonl``. Entries carry a ``level``:

1. phase: ``clustering`` or ``resolution``
2. step: ``scoring``, ``identification``, ``relations``
3. detail: one library, one rejected relation, or a forwarded log record

Console output goes through the standard ``logging`` module with a Rich
handler (``configure_logging``); ``setup_logging_bridge`` copies warnings and
errors from the ``libsift`` loggers into the active run log.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "LogLevel",
    "LogStatus",
    "RunLogger",
    "StepContext",
    "RunLoggerHandler",
    "configure_logging",
    "setup_logging_bridge",
    "teardown_logging_bridge",
]


class LogLevel(int, Enum):
    PHASE = 1
    STEP = 2
    DETAIL = 3


class LogStatus(str, Enum):
    STARTED = "started"
    COMPLETED = "completed"
    WARNING = "warning"
    ERROR = "error"
    SKIPPED = "skipped"


def _elapsed_ms(since: datetime) -> int:
    return int((datetime.now() - since).total_seconds() * 1000)


class RunLogger:
    """
    Append-only JSONL log of one run.

    Step sequence numbers restart with every phase. Entries written outside a
    phase are attributed to a default phase name given by the caller.
    """

    def __init__(self, run_id: int | str, logs_dir: str | Path = "workspace/logs"):
        self.run_id = run_id
        self.run_dir = Path(logs_dir) / f"run_{run_id}"
        self.run_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.run_dir / f"log_{datetime.now():%Y%m%d_%H%M%S}.jsonl"

        self._phase: str | None = None
        self._phase_started: datetime | None = None
        self._sequence = 0

    def write(self, level: LogLevel, status: LogStatus, message: str, **fields: Any) -> None:
        """Append one entry; fields set to None are left out."""
        entry: dict[str, Any] = {
            "level": level.value,
            "phase": fields.pop("phase", None) or self._phase or "system",
            "status": status.value,
            "timestamp": datetime.now().isoformat(),
            "message": message,
        }
        entry.update((k, v) for k, v in fields.items() if v is not None)
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def get_log_path(self) -> Path:
        return self.log_file

    # -- phases ------------------------------------------------------------

    def phase_start(self, phase: str, message: str = "") -> None:
        self._phase = phase
        self._phase_started = datetime.now()
        self._sequence = 0
        self.write(LogLevel.PHASE, LogStatus.STARTED, message or f"Starting {phase}")

    def _end_phase(self, phase: str, status: LogStatus, message: str, **fields: Any) -> None:
        duration = None
        if self._phase == phase and self._phase_started is not None:
            duration = _elapsed_ms(self._phase_started)
        self.write(LogLevel.PHASE, status, message, phase=phase, duration_ms=duration, **fields)
        self._phase = None
        self._phase_started = None

    def phase_complete(
        self, phase: str, message: str = "", stats: dict[str, Any] | None = None
    ) -> None:
        self._end_phase(phase, LogStatus.COMPLETED, message or f"Completed {phase}", stats=stats)

    def phase_error(self, phase: str, error: str, message: str = "") -> None:
        self._end_phase(phase, LogStatus.ERROR, message or f"Error in {phase}", error=error)

    # -- steps -------------------------------------------------------------

    def step_start(self, step: str, message: str = "") -> StepContext:
        """Log the start of a step and return the context that closes it."""
        self._sequence += 1
        self.write(
            LogLevel.STEP,
            LogStatus.STARTED,
            message or f"Starting {step}",
            step=step,
            sequence=self._sequence,
        )
        return StepContext(self, step, self._sequence)

    # -- details -----------------------------------------------------------

    def detail_library_created(
        self, library_id: int, artifact_ids: list[str], seed_count: int
    ) -> None:
        self.write(
            LogLevel.DETAIL,
            LogStatus.COMPLETED,
            f"Library {library_id}: {len(artifact_ids)} artifact(s)",
            phase=self._phase or "clustering",
            stats={"library_id": library_id, "artifacts": artifact_ids, "seed_count": seed_count},
        )

    def detail_relation_rejected(
        self, kind: str, lhs: str, rhs: str, relation_class: str
    ) -> None:
        """Record a relation skipped because its source is not internal."""
        self.write(
            LogLevel.DETAIL,
            LogStatus.SKIPPED,
            f"Rejected {kind}: {lhs} -> {rhs}",
            phase=self._phase or "resolution",
            stats={"kind": kind, "lhs": lhs, "rhs": rhs, "relation_class": relation_class},
        )


class StepContext:
    """
    Closes a step with counters, or with an error.

    Usable directly (``complete()``/``error()``) or as a context manager, which
    completes on a clean exit and records the exception otherwise.
    """

    def __init__(self, run_logger: RunLogger, step: str, sequence: int):
        self.run_logger = run_logger
        self.step = step
        self.sequence = sequence
        self.started = datetime.now()
        self.items_processed = 0
        self.items_created = 0
        self.items_failed = 0
        self._closed = False

    def __enter__(self) -> StepContext:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            self.error(str(exc_val))
        elif not self._closed:
            self.complete()

    def complete(self, message: str = "") -> None:
        self._closed = True
        self.run_logger.write(
            LogLevel.STEP,
            LogStatus.COMPLETED,
            message or f"Completed {self.step}",
            step=self.step,
            sequence=self.sequence,
            duration_ms=_elapsed_ms(self.started),
            items_processed=self.items_processed,
            items_created=self.items_created,
            items_failed=self.items_failed,
        )

    def error(self, error: str, message: str = "") -> None:
        self._closed = True
        self.run_logger.write(
            LogLevel.STEP,
            LogStatus.ERROR,
            message or f"Error in {self.step}",
            step=self.step,
            sequence=self.sequence,
            duration_ms=_elapsed_ms(self.started),
            error=error,
        )


# =============================================================================
# Standard logging
# =============================================================================


def configure_logging(level: str = "INFO") -> None:
    """Send root logging to stderr through a Rich handler."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        ],
        force=True,
    )


class RunLoggerHandler(logging.Handler):
    """Copies log records into a RunLogger as detail entries."""

    def __init__(self, run_logger: RunLogger, min_level: int = logging.WARNING):
        super().__init__(level=min_level)
        self.run_logger = run_logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                status, error = LogStatus.ERROR, message
            elif record.levelno >= logging.WARNING:
                status, error = LogStatus.WARNING, None
            else:
                status, error = LogStatus.COMPLETED, None
            self.run_logger.write(
                LogLevel.DETAIL,
                status,
                message,
                error=error,
                stats={"logger": record.name, "level": record.levelname},
            )
        except Exception:
            self.handleError(record)


def setup_logging_bridge(
    run_logger: RunLogger,
    min_level: int = logging.WARNING,
    logger_names: list[str] | None = None,
) -> RunLoggerHandler:
    """Attach a RunLoggerHandler to the given loggers (default: ``libsift``)."""
    handler = RunLoggerHandler(run_logger, min_level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    for name in logger_names or ["libsift"]:
        logging.getLogger(name).addHandler(handler)
    return handler


def teardown_logging_bridge(
    handler: RunLoggerHandler, logger_names: list[str] | None = None
) -> None:
    for name in logger_names or ["libsift"]:
        logging.getLogger(name).removeHandler(handler)
