"""Shared pytest fixtures for the create-mrn-app test suite.

Provides reusable fixtures for:
- Temporary project directories
- ProjectConfig factories (through the real resolver)
- A template context with every key the catalog reads
- Mock subprocess helpers
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_mrn_app.resolver import Extras, ProjectConfig, Selection, resolve
from create_mrn_app.scaffolder import ProjectGenerator, TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory for generated projects (auto-cleanup)."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config() -> Callable[..., ProjectConfig]:
    """Factory for resolved configs.

    Goes through the real resolver (defaults for anything unset), so the
    result always satisfies the compatibility tables.

    Usage:
        def test_thing(make_config):
            config = make_config(framework="react", backend="elysia")
    """
    def factory(**fields: Any) -> ProjectConfig:
        fields.setdefault("project_name", "test-app")
        fields.setdefault("framework", "next")
        return resolve(Selection(**fields))

    return factory


@pytest.fixture
def full_extras() -> Extras:
    return Extras(typescript=True, eslint=True, testing=True, playwright=True, docker=True)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def full_context(full_extras: Extras) -> dict[str, Any]:
    """Context containing every variable any template in the catalog reads.

    Built from a real separate-layout project, then topped up with the keys
    that only frontend, backend or per-file contexts add.
    """
    config = ProjectConfig(
        project_name="ctx-app",
        framework="next",
        backend="hono",
        runtime="node",
        database="neon",
        orm="drizzle",
        auth="next-auth",
        styling="tailwind-shadcn",
        extras=full_extras,
    )
    context = ProjectGenerator(config).build_context()
    context.update(
        {
            "env_prefix": "NEXT_PUBLIC_",
            "content_paths": ["./app/**/*.{ts,tsx}"],
            "uses_convex": False,
            "uses_supabase": False,
            "jsx": "tsx",
            "ext": "ts",
            "source_dir": "app",
            "db_dir": "src/db",
            "is_bun": False,
            "resource": "items",
            "model": "item",
        }
    )
    return context


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
