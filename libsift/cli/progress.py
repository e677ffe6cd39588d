"""
Rich-based progress reporting for CLI operations.

Provides progress bars and status updates for clustering and import runs.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.live import Live
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

# =============================================================================
# QUIET PROGRESS REPORTER
# =============================================================================


class QuietProgressReporter:
    """
    No-op progress reporter for headless/batch mode.

    Implements the ProgressReporter protocol but does nothing.
    """

    def start_phase(self, name: str, total_steps: int) -> None:
        pass

    def start_step(self, name: str, total_items: int | None = None) -> None:
        pass

    def update(self, current: int | None = None, message: str = "") -> None:
        pass

    def advance(self, amount: int = 1) -> None:
        pass

    def complete_step(self, message: str = "") -> None:
        pass

    def complete_phase(self, message: str = "") -> None:
        pass

    def log(self, message: str, level: str = "info") -> None:
        pass

    def __enter__(self) -> QuietProgressReporter:
        return self

    def __exit__(self, *args: Any) -> None:
        pass


# =============================================================================
# RICH PROGRESS REPORTER
# =============================================================================


class RichProgressReporter:
    """
    Rich-based progress reporter for pipeline operations.

    Shows one bar for the phase and one for the current step.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._progress: Progress | None = None
        self._live: Live | None = None

        self._phase_task: TaskID | None = None
        self._step_task: TaskID | None = None
        self._current_phase: str = ""
        self._current_step: str = ""

    def __enter__(self) -> RichProgressReporter:
        """Start the progress display."""
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=self.console,
            expand=False,
        )
        self._live = Live(self._progress, console=self.console, refresh_per_second=10)
        self._live.__enter__()
        return self

    def __exit__(self, *args: Any) -> None:
        """Stop the progress display."""
        if self._live:
            self._live.__exit__(*args)
        self._progress = None
        self._live = None

    def start_phase(self, name: str, total_steps: int) -> None:
        if not self._progress:
            return

        self._current_phase = name
        if self._phase_task is not None:
            self._progress.remove_task(self._phase_task)

        self._phase_task = self._progress.add_task(
            f"[bold cyan]{name.upper()}",
            total=total_steps,
        )

    def start_step(self, name: str, total_items: int | None = None) -> None:
        if not self._progress:
            return

        self._current_step = name
        if self._step_task is not None:
            self._progress.remove_task(self._step_task)

        # total=None renders a spinner only
        self._step_task = self._progress.add_task(
            f"  {name}",
            total=total_items if total_items else None,
        )

    def update(self, current: int | None = None, message: str = "") -> None:
        if not self._progress or self._step_task is None:
            return

        description = f"  {self._current_step}"
        if message:
            if len(message) > 40:
                message = message[:37] + "..."
            description = f"  {self._current_step}: {message}"

        self._progress.update(
            self._step_task,
            description=description,
            completed=current,
        )

    def advance(self, amount: int = 1) -> None:
        if not self._progress or self._step_task is None:
            return
        self._progress.advance(self._step_task, amount)

    def complete_step(self, message: str = "") -> None:
        """Mark current step as complete and advance phase."""
        if not self._progress:
            return

        if self._step_task is not None:
            self._progress.remove_task(self._step_task)
            self._step_task = None

        if self._phase_task is not None:
            self._progress.advance(self._phase_task, 1)

        if message:
            self.console.print(f"[dim]{message}[/dim]")

    def complete_phase(self, message: str = "") -> None:
        if not self._progress:
            return

        if self._phase_task is not None:
            task = next(t for t in self._progress.tasks if t.id == self._phase_task)
            if task.total is not None:
                self._progress.update(self._phase_task, completed=task.total)

        if message:
            self.console.print(f"[green]{message}[/green]")

    def log(self, message: str, level: str = "info") -> None:
        if level == "error":
            self.console.print(f"[red]{message}[/red]")
        elif level == "warning":
            self.console.print(f"[yellow]{message}[/yellow]")
        else:
            self.console.print(f"[dim]{message}[/dim]")


def create_progress_reporter(
    quiet: bool = False,
    console: Console | None = None,
) -> QuietProgressReporter | RichProgressReporter:
    """
    Create a progress reporter for pipeline operations.

    Args:
        quiet: If True, return a no-op reporter
        console: Optional Rich console

    Returns:
        ProgressReporter implementation
    """
    if quiet:
        return QuietProgressReporter()
    return RichProgressReporter(console)
