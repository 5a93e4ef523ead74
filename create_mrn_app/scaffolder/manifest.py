"""Package manifests (``package.json``) and their composition.

* ``merge_manifest`` folds an integrated backend's scripts and dependencies
  into the frontend manifest (backend wins on collisions).
* ``build_root_manifest`` builds the workspace root of a monorepo.
* ``build_workspace_file`` renders ``pnpm-workspace.yaml`` for pnpm monorepos.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from ..resolver.layout import backend_dir, frontend_dir
from ..resolver.models import LayoutDecision, PackageManager, ProjectConfig

MANIFEST_VERSION = "0.1.0"
CONCURRENTLY_VERSION = "^9.1.0"

ROOT_SCRIPT_KEYS = (
    "dev",
    "dev:frontend",
    "dev:backend",
    "build",
    "build:frontend",
    "build:backend",
    "lint",
    "test",
)


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class Manifest(BaseModel):
    """One ``package.json``.  Serialise with :meth:`to_json`."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str = MANIFEST_VERSION
    private: bool = True
    type: Optional[Literal["module"]] = None
    workspaces: Optional[list[str]] = None
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    def to_json(self) -> dict[str, Any]:
        """Dictionary in ``package.json`` shape (aliases applied, unset optionals omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)


def package_name(config: ProjectConfig, role: str | None = None) -> str:
    """``<name>`` for single packages, ``<name>-<role>`` for monorepo members."""
    if role is None:
        return config.project_name
    return f"{config.project_name}-{role}"


# ---------------------------------------------------------------------------
# Merging (integrated layout)
# ---------------------------------------------------------------------------


def merge_manifest(
    frontend: Manifest,
    backend_dependencies: Mapping[str, str],
    backend_dev_dependencies: Mapping[str, str],
    backend_scripts: Mapping[str, str],
) -> Manifest:
    """Return *frontend* with the backend mappings layered on top.

    For ``dependencies``, ``devDependencies`` and ``scripts`` the backend value
    wins whenever both sides define the same key.  Neither input is mutated.
    """
    return frontend.model_copy(
        update={
            "scripts": {**frontend.scripts, **backend_scripts},
            "dependencies": {**frontend.dependencies, **backend_dependencies},
            "dev_dependencies": {**frontend.dev_dependencies, **backend_dev_dependencies},
        }
    )


# ---------------------------------------------------------------------------
# Monorepo root (separate layout)
# ---------------------------------------------------------------------------


def _workspace_run(pm: PackageManager, packages: list[str], script: str) -> str:
    """Run *script* in the named workspace packages, skipping packages without it."""
    if pm is PackageManager.PNPM:
        filters = " ".join(f"--filter {p}" for p in packages)
        return f"pnpm {filters} run --if-present {script}"
    if pm is PackageManager.NPM:
        workspaces = " ".join(f"--workspace={p}" for p in packages)
        return f"npm run {script} {workspaces} --if-present"
    filters = " ".join(f"--filter {p}" for p in packages)
    return f"bun run {filters} {script}"


def build_root_manifest(config: ProjectConfig) -> Manifest:
    """Root ``package.json`` of a monorepo.

    The script keys are always exactly ``ROOT_SCRIPT_KEYS``.  Sub-packages are
    addressed by package name using the package manager's workspace filters.
    """
    pm = config.package_manager
    frontend = package_name(config, "frontend")
    backend = package_name(config, "backend")

    dev_frontend = _workspace_run(pm, [frontend], "dev")
    dev_backend = _workspace_run(pm, [backend], "dev")
    build_frontend = _workspace_run(pm, [frontend], "build")
    build_backend = _workspace_run(pm, [backend], "build")

    scripts = {
        "dev": (
            'concurrently -n frontend,backend -c blue,green '
            f'"{dev_frontend}" "{dev_backend}"'
        ),
        "dev:frontend": dev_frontend,
        "dev:backend": dev_backend,
        "build": f"{build_backend} && {build_frontend}",
        "build:frontend": build_frontend,
        "build:backend": build_backend,
        "lint": _workspace_run(pm, [frontend, backend], "lint"),
        "test": _workspace_run(pm, [frontend, backend], "test"),
    }

    return Manifest(
        name=config.project_name,
        workspaces=[
            frontend_dir(LayoutDecision.SEPARATE),
            backend_dir(LayoutDecision.SEPARATE),
        ],
        scripts=scripts,
        dev_dependencies={"concurrently": CONCURRENTLY_VERSION},
    )


def build_workspace_file(config: ProjectConfig) -> str | None:
    """Body of ``pnpm-workspace.yaml``, or ``None`` for other package managers."""
    if config.package_manager is not PackageManager.PNPM:
        return None
    return yaml.safe_dump({"packages": ["packages/*"]}, default_flow_style=False, sort_keys=False)
