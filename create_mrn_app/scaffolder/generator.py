"""Main scaffolding orchestrator.

Takes a resolved ``ProjectConfig`` and writes the project tree for its layout:

* ``none``       -- the frontend package at the project root.
* ``integrated`` -- frontend and backend files at the root, one merged manifest.
* ``separate``   -- ``packages/frontend`` + ``packages/backend`` under a
  workspace root with its own manifest (and ``pnpm-workspace.yaml`` for pnpm).

Every layout also gets a README and the AI assistant files at the root.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

from ..resolver.compat import label_for
from ..resolver.layout import backend_dir, classify, frontend_dir
from ..resolver.models import LayoutDecision, PackageManager, ProjectConfig, Styling
from ..runner.package_manager import get_exec_command, get_install_command, get_run_command
from ..utils import save_json, write_text
from .backends import BackendGenerator, get_backend_generator
from .frontends import FrontendGenerator, get_frontend_generator
from .manifest import (
    Manifest,
    build_root_manifest,
    build_workspace_file,
    merge_manifest,
    package_name,
)
from .templates import TemplateRenderer

_LOCKFILES: dict[PackageManager, str] = {
    PackageManager.NPM: "package-lock.json",
    PackageManager.PNPM: "pnpm-lock.yaml",
    PackageManager.BUN: "bun.lock",
}

_FROZEN_INSTALL: dict[PackageManager, str] = {
    PackageManager.NPM: "npm ci",
    PackageManager.PNPM: "pnpm install --frozen-lockfile",
    PackageManager.BUN: "bun install --frozen-lockfile",
}


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Writes the template catalog for one configuration.

    The frontend catalog entry always runs; the backend entry runs whenever
    the layout is not ``none``.  Manifests are computed by :meth:`manifests`
    (pure) and written by :meth:`generate`.
    """

    def __init__(self, config: ProjectConfig, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.layout = classify(config.backend)
        self.frontend: FrontendGenerator = get_frontend_generator(config, self.renderer)
        self.backend: Optional[BackendGenerator] = None
        if self.layout is not LayoutDecision.NONE:
            self.backend = get_backend_generator(config, self.renderer)

    # -- Public API --------------------------------------------------------

    async def generate(self, project_path: str | Path) -> list[Path]:
        """Generate the complete project under *project_path*.

        Args:
            project_path: The project root (created if missing).  Existing
                files are overwritten; nothing is rolled back on failure.

        Returns:
            Every file written, in write order.
        """
        root = Path(project_path)
        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)
        context = self.build_context()
        written: list[Path] = []

        # 1. Frontend package
        written += await self.frontend.generate(root / frontend_dir(self.layout), context)

        # 2. Backend code (integrated into the frontend, or its own package)
        location = backend_dir(self.layout)
        if self.backend is not None and location is not None:
            written += await self.backend.generate(root / location, context)

        # 3. Manifests
        for relative, manifest in self.manifests().items():
            written.append(await save_json(manifest.to_json(), root / relative))

        # 4. Workspace root extras
        if self.layout is LayoutDecision.SEPARATE:
            written += await self._write_workspace_root(root, context)

        # 5. Documentation and AI assistant files
        for template_path, output in (
            ("project/README.md.j2", "README.md"),
            ("project/CLAUDE.md.j2", "CLAUDE.md"),
            ("project/cursorrules.j2", ".cursorrules"),
        ):
            written.append(
                await self.renderer.render_to_file(template_path, root / output, context)
            )

        return written

    def manifests(self) -> dict[str, Manifest]:
        """Manifest per path (relative to the project root) for this layout."""
        config = self.config
        if self.layout is LayoutDecision.SEPARATE:
            assert self.backend is not None
            return {
                "package.json": build_root_manifest(config),
                f"{frontend_dir(self.layout)}/package.json": self.frontend.manifest(
                    package_name(config, "frontend")
                ),
                f"{backend_dir(self.layout)}/package.json": self.backend.manifest(
                    package_name(config, "backend")
                ),
            }

        manifest = self.frontend.manifest(package_name(config))
        if self.layout is LayoutDecision.INTEGRATED:
            assert self.backend is not None
            manifest = merge_manifest(
                manifest,
                self.backend.dependencies(),
                self.backend.dev_dependencies(),
                self.backend.scripts(),
            )
        return {"package.json": manifest}

    def build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project config.

        Enum members are flattened to their string values so templates never
        see ``Framework.NEXT``-style reprs.
        """
        config = self.config
        extras = config.extras
        pm = config.package_manager
        separate = self.layout is LayoutDecision.SEPARATE

        return {
            "project_name": config.project_name,
            "framework": config.framework.value,
            "framework_label": label_for(config.framework)[0],
            "backend": config.backend.value,
            "backend_label": label_for(config.backend)[0],
            "database": config.database.value,
            "database_label": label_for(config.database)[0],
            "orm": config.orm.value,
            "auth": config.auth.value,
            "auth_label": label_for(config.auth)[0],
            "styling": config.styling.value,
            "styling_label": label_for(config.styling)[0],
            "package_manager": pm.value,
            "runtime": config.runtime.value if config.runtime is not None else "",
            "typescript": extras.typescript,
            "eslint": extras.eslint,
            "prettier": extras.prettier,
            "testing": extras.testing,
            "playwright": extras.playwright,
            "docker": extras.docker,
            "has_tailwind": config.has_tailwind,
            "shadcn": config.styling is Styling.TAILWIND_SHADCN,
            "layout": self.layout.value,
            "separate": separate,
            "integrated": self.layout is LayoutDecision.INTEGRATED,
            "frontend_package": package_name(config, "frontend") if separate else config.project_name,
            "backend_package": package_name(config, "backend") if separate else config.project_name,
            "frontend_dir": frontend_dir(self.layout),
            "backend_dir": backend_dir(self.layout) or "",
            "frontend_port": self.frontend.port,
            "backend_port": 4000,
            "run_dev": get_run_command(pm, "dev"),
            "run_build": get_run_command(pm, "build"),
            "run_lint": get_run_command(pm, "lint"),
            "install_command": " ".join(get_install_command(pm)),
            "exec_command": get_exec_command(pm),
            "lockfile": _LOCKFILES[pm],
            "frozen_install": _FROZEN_INSTALL[pm],
        }

    # -- Workspace root ----------------------------------------------------

    async def _write_workspace_root(self, root: Path, context: dict[str, Any]) -> list[Path]:
        written = [
            await self.renderer.render_to_file("shared/gitignore.j2", root / ".gitignore", context)
        ]

        workspace_file = build_workspace_file(self.config)
        if workspace_file is not None:
            path = root / "pnpm-workspace.yaml"
            await asyncio.to_thread(write_text, path, workspace_file)
            written.append(path)

        if self.config.extras.docker:
            written.append(
                await self.renderer.render_to_file(
                    "shared/docker-compose.yml.j2", root / "docker-compose.yml", context
                )
            )
        return written
