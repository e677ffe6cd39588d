"""
Services layer - orchestration of the clustering and resolution stages.

Used by the CLI; each service takes validated input documents, optional run
logger and progress reporter, and returns a result dict with stats.
"""

from __future__ import annotations

from . import identification, relations

__all__ = ["identification", "relations"]
