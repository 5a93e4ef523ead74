"""Shared machinery for the template catalog.

A catalog entry (one frontend or backend framework) *declares* what it
contributes to a project: manifest scripts and dependencies, the templates it
renders and the JSON config files it writes.  ``CatalogGenerator.generate``
turns those declarations into files; ``ProjectGenerator`` decides where they
go and writes the manifests.

The ORM helpers at the bottom are shared by every catalog entry that owns the
database layer (separate backends and ``nextjs-builtin``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

from ..resolver.layout import classify
from ..resolver.models import ORM, Database, LayoutDecision, ProjectConfig
from ..utils import save_json
from .manifest import Manifest
from .templates import TemplateRenderer

PRETTIER_CONFIG: dict[str, Any] = {
    "semi": True,
    "singleQuote": False,
    "tabWidth": 2,
    "trailingComma": "es5",
    "printWidth": 100,
}


class CatalogGenerator:
    """Base class for one frontend or backend framework in the catalog.

    Subclasses override the declaration methods; the base implementations
    declare nothing.
    """

    key: ClassVar[str] = ""
    label: ClassVar[str] = ""
    module_type: ClassVar[bool] = True

    def __init__(self, config: ProjectConfig, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.layout: LayoutDecision = classify(config.backend)

    # -- Declarations ------------------------------------------------------

    def scripts(self) -> dict[str, str]:
        return {}

    def dependencies(self) -> dict[str, str]:
        return {}

    def dev_dependencies(self) -> dict[str, str]:
        return {}

    def templates(self) -> list[tuple[str, str]]:
        """``(template path, output path relative to the target dir)`` pairs."""
        return []

    def json_files(self) -> dict[str, dict[str, Any]]:
        """Output path -> JSON document, for configs built in Python."""
        return {}

    def extra_context(self) -> dict[str, Any]:
        """Template variables specific to this catalog entry."""
        return {}

    def file_context(self, output: str, context: dict[str, Any]) -> dict[str, Any]:
        """Context for the single file written to *output*."""
        return context

    # -- Output ------------------------------------------------------------

    @property
    def ext(self) -> str:
        return "ts" if self.config.extras.typescript else "js"

    def manifest(self, name: str) -> Manifest:
        """This entry's own ``package.json``."""
        return Manifest(
            name=name,
            type="module" if self.module_type else None,
            scripts=self.scripts(),
            dependencies=self.dependencies(),
            dev_dependencies=self.dev_dependencies(),
        )

    async def generate(self, target: str | Path, context: dict[str, Any]) -> list[Path]:
        """Write every declared template and JSON file under *target*.

        Returns:
            The written paths, in declaration order.
        """
        target = Path(target)
        ctx = {**context, **self.extra_context()}
        written: list[Path] = []

        for template_path, output in self.templates():
            path = await self.renderer.render_to_file(
                template_path, target / output, self.file_context(output, ctx)
            )
            written.append(path)

        for output, data in self.json_files().items():
            written.append(await save_json(data, target / output))

        return written


# ---------------------------------------------------------------------------
# ORM helpers
# ---------------------------------------------------------------------------

_DRIZZLE_DRIVERS: dict[Database, dict[str, str]] = {
    Database.SQLITE: {"better-sqlite3": "^11.6.0"},
    Database.TURSO: {"@libsql/client": "^0.14.0"},
    Database.NEON: {"@neondatabase/serverless": "^0.10.0"},
    Database.SUPABASE: {"@neondatabase/serverless": "^0.10.0"},
    Database.PLANETSCALE: {"@planetscale/database": "^1.19.0"},
}


def orm_dependencies(config: ProjectConfig) -> dict[str, str]:
    """Runtime packages for the configured ORM and database driver."""
    if config.orm is ORM.PRISMA:
        return {"@prisma/client": "^5.22.0"}
    if config.orm is ORM.DRIZZLE:
        return {"drizzle-orm": "^0.36.0", **_DRIZZLE_DRIVERS.get(config.database, {})}
    return {}


def orm_dev_dependencies(config: ProjectConfig) -> dict[str, str]:
    if config.orm is ORM.PRISMA:
        return {"prisma": "^5.22.0"}
    if config.orm is ORM.DRIZZLE:
        dev = {"drizzle-kit": "^0.28.0"}
        if config.database is Database.SQLITE:
            dev["@types/better-sqlite3"] = "^7.6.0"
        return dev
    return {}


def orm_scripts(config: ProjectConfig) -> dict[str, str]:
    if config.orm is ORM.PRISMA:
        return {
            "db:generate": "prisma generate",
            "db:push": "prisma db push",
            "db:migrate": "prisma migrate dev",
            "db:studio": "prisma studio",
        }
    if config.orm is ORM.DRIZZLE:
        return {
            "db:generate": "drizzle-kit generate",
            "db:push": "drizzle-kit push",
            "db:migrate": "drizzle-kit migrate",
            "db:studio": "drizzle-kit studio",
        }
    return {}


def orm_templates(config: ProjectConfig, db_dir: str) -> list[tuple[str, str]]:
    """Schema, client and tool config for the configured ORM under *db_dir*."""
    if config.orm is ORM.PRISMA:
        return [
            ("orm/schema.prisma.j2", "prisma/schema.prisma"),
            ("orm/prisma-client.j2", f"{db_dir}/client.ts"),
        ]
    if config.orm is ORM.DRIZZLE:
        return [
            ("orm/drizzle-schema.j2", f"{db_dir}/schema.ts"),
            ("orm/drizzle-client.j2", f"{db_dir}/client.ts"),
            ("orm/drizzle.config.j2", "drizzle.config.ts"),
        ]
    return []
