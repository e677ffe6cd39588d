"""Tests for cli.progress module."""

from __future__ import annotations

import io

from rich.console import Console

from libsift.cli.progress import (
    QuietProgressReporter,
    RichProgressReporter,
    create_progress_reporter,
)


class TestQuietProgressReporter:
    """Tests for QuietProgressReporter - no-op implementation."""

    def test_methods_do_nothing(self):
        reporter = QuietProgressReporter()
        reporter.start_phase("clustering", 2)
        reporter.start_step("scoring", 10)
        reporter.update(current=5, message="A")
        reporter.advance(2)
        reporter.complete_step("done")
        reporter.complete_phase("done")
        reporter.log("hello", level="warning")

    def test_context_manager_returns_self(self):
        reporter = QuietProgressReporter()
        with reporter as r:
            assert r is reporter


class TestRichProgressReporter:
    """Tests for RichProgressReporter."""

    def _console(self):
        buffer = io.StringIO()
        return Console(file=buffer, force_terminal=False, width=100), buffer

    def test_no_op_outside_context(self):
        console, buffer = self._console()
        reporter = RichProgressReporter(console)
        reporter.start_phase("clustering", 2)
        reporter.update(1, "x")
        reporter.complete_phase("done")
        assert buffer.getvalue() == ""

    def test_full_phase(self):
        console, buffer = self._console()
        with RichProgressReporter(console) as reporter:
            reporter.start_phase("clustering", 2)
            reporter.start_step("scoring", 3)
            reporter.update(1, "a very long message that should be truncated in the bar")
            reporter.advance()
            reporter.complete_step()
            reporter.start_step("identification", 0)
            reporter.complete_step("clusters done")
            reporter.complete_phase("Identified 2 libraries")

        output = buffer.getvalue()
        assert "clusters done" in output
        assert "Identified 2 libraries" in output

    def test_restarting_phase_replaces_task(self):
        console, _ = self._console()
        with RichProgressReporter(console) as reporter:
            reporter.start_phase("clustering", 2)
            reporter.start_phase("resolution", 1)
            assert len(reporter._progress.tasks) == 1

    def test_log_levels(self):
        console, buffer = self._console()
        reporter = RichProgressReporter(console)
        reporter.log("plain")
        reporter.log("warn", level="warning")
        reporter.log("bad", level="error")
        output = buffer.getvalue()
        assert "plain" in output and "warn" in output and "bad" in output


class TestCreateProgressReporter:
    def test_quiet(self):
        assert isinstance(create_progress_reporter(quiet=True), QuietProgressReporter)

    def test_rich(self):
        assert isinstance(create_progress_reporter(), RichProgressReporter)
