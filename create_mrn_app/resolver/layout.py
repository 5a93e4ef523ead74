"""Project layout classification."""

from __future__ import annotations

from .compat import DEFAULT_TABLES, CompatibilityTables
from .models import BackendFramework, LayoutDecision


def classify(
    backend: BackendFramework,
    tables: CompatibilityTables = DEFAULT_TABLES,
) -> LayoutDecision:
    """Decide where the backend code lives.

    ``separate`` backends get their own package in a monorepo
    (``packages/frontend`` + ``packages/backend``), ``integrated`` backends are
    written into the frontend package, and anything else means there is no
    backend package at all.
    """
    if backend in tables.separate_backends:
        return LayoutDecision.SEPARATE
    if backend in tables.integrated_backends:
        return LayoutDecision.INTEGRATED
    return LayoutDecision.NONE


def frontend_dir(layout: LayoutDecision) -> str:
    """Directory (relative to the project root) that holds the frontend package."""
    return "packages/frontend" if layout is LayoutDecision.SEPARATE else "."


def backend_dir(layout: LayoutDecision) -> str | None:
    """Directory that holds the backend code, or ``None`` when there is none."""
    if layout is LayoutDecision.SEPARATE:
        return "packages/backend"
    if layout is LayoutDecision.INTEGRATED:
        return "."
    return None
