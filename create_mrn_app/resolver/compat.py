"""Static compatibility tables.

Every allow-list is keyed by the field it depends on: frontend framework ->
backends / databases / auth providers, and database -> ORMs.  Backend-specific
behaviour (layout, forced package manager, runtime choice, skipping the
database step) lives on one frozen ``BackendDescriptor`` per backend so that
"at most one special behaviour per backend" holds by construction.

The tables are built once at import time (``DEFAULT_TABLES``) and never
mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional

from .models import (
    ORM,
    Auth,
    BackendFramework,
    Database,
    Framework,
    LayoutDecision,
    PackageManager,
    Runtime,
    Styling,
)


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

class BackendCapability(str, Enum):
    """The special resolution behaviour a backend may carry."""
    MANDATES_PACKAGE_MANAGER = "mandates-package-manager"
    RUNTIME_SELECTABLE = "runtime-selectable"
    SKIPS_DATABASE = "skips-database"


@dataclass(frozen=True)
class BackendDescriptor:
    """Static facts about one backend framework."""

    backend: BackendFramework
    label: str
    hint: str
    layout: LayoutDecision = LayoutDecision.NONE
    capability: Optional[BackendCapability] = None
    package_manager: Optional[PackageManager] = None

    def __post_init__(self) -> None:
        mandates = self.capability is BackendCapability.MANDATES_PACKAGE_MANAGER
        if mandates and self.package_manager is None:
            raise ValueError(
                f"Backend {self.backend.value!r} mandates a package manager but names none"
            )
        if not mandates and self.package_manager is not None:
            raise ValueError(
                f"Backend {self.backend.value!r} names a package manager without "
                f"the {BackendCapability.MANDATES_PACKAGE_MANAGER.value} capability"
            )

    @property
    def mandates_package_manager(self) -> bool:
        return self.capability is BackendCapability.MANDATES_PACKAGE_MANAGER

    @property
    def runtime_selectable(self) -> bool:
        return self.capability is BackendCapability.RUNTIME_SELECTABLE

    @property
    def skips_database(self) -> bool:
        return self.capability is BackendCapability.SKIPS_DATABASE


@dataclass(frozen=True)
class RuntimeDescriptor:
    """Static facts about one runtime choice."""

    runtime: Runtime
    label: str
    hint: str
    package_manager: Optional[PackageManager] = None


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompatibilityTables:
    """Immutable allow-lists and descriptors consulted by the resolver.

    Allow-lists are tuples so that prompt options keep a stable order; the
    first entry of an allow-list is also its fallback default.
    """

    framework_backends: Mapping[Framework, tuple[BackendFramework, ...]]
    framework_databases: Mapping[Framework, tuple[Database, ...]]
    framework_auths: Mapping[Framework, tuple[Auth, ...]]
    database_orms: Mapping[Database, tuple[ORM, ...]]
    backends: Mapping[BackendFramework, BackendDescriptor]
    runtimes: Mapping[Runtime, RuntimeDescriptor]
    frameworks: tuple[Framework, ...] = tuple(Framework)
    stylings: tuple[Styling, ...] = tuple(Styling)
    package_managers: tuple[PackageManager, ...] = (
        PackageManager.PNPM,
        PackageManager.NPM,
        PackageManager.BUN,
    )

    def __post_init__(self) -> None:
        for name in (
            "framework_backends",
            "framework_databases",
            "framework_auths",
            "database_orms",
            "backends",
            "runtimes",
        ):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        self._check()

    def _check(self) -> None:
        """Reject tables whose entries reference missing descriptors or lists."""
        for framework in self.frameworks:
            for table in (self.framework_backends, self.framework_databases, self.framework_auths):
                if framework not in table:
                    raise ValueError(f"No allow-list for framework {framework.value!r}")
            for backend in self.framework_backends[framework]:
                if backend not in self.backends:
                    raise ValueError(f"No descriptor for backend {backend.value!r}")
            for database in self.framework_databases[framework]:
                if database not in self.database_orms:
                    raise ValueError(f"No ORM allow-list for database {database.value!r}")
        for backend, descriptor in self.backends.items():
            if descriptor.backend is not backend:
                raise ValueError(f"Descriptor for {backend.value!r} describes {descriptor.backend.value!r}")
        if self.separate_backends & self.integrated_backends:
            raise ValueError("A backend cannot be both separate and integrated")

    # -- Allow-list lookups ------------------------------------------------

    def backends_for(self, framework: Framework) -> tuple[BackendFramework, ...]:
        return self.framework_backends[framework]

    def databases_for(self, framework: Framework) -> tuple[Database, ...]:
        return self.framework_databases[framework]

    def auths_for(self, framework: Framework) -> tuple[Auth, ...]:
        return self.framework_auths[framework]

    def orms_for(self, database: Database) -> tuple[ORM, ...]:
        return self.database_orms[database]

    def descriptor(self, backend: BackendFramework) -> BackendDescriptor:
        return self.backends[backend]

    # -- Derived backend sets ----------------------------------------------

    @property
    def separate_backends(self) -> frozenset[BackendFramework]:
        return frozenset(
            b for b, d in self.backends.items() if d.layout is LayoutDecision.SEPARATE
        )

    @property
    def integrated_backends(self) -> frozenset[BackendFramework]:
        return frozenset(
            b for b, d in self.backends.items() if d.layout is LayoutDecision.INTEGRATED
        )

    @property
    def package_manager_mandating_backends(self) -> frozenset[BackendFramework]:
        return frozenset(b for b, d in self.backends.items() if d.mandates_package_manager)

    @property
    def runtime_selectable_backends(self) -> frozenset[BackendFramework]:
        return frozenset(b for b, d in self.backends.items() if d.runtime_selectable)

    @property
    def database_skipping_backends(self) -> frozenset[BackendFramework]:
        return frozenset(b for b, d in self.backends.items() if d.skips_database)


# ---------------------------------------------------------------------------
# Default table data
# ---------------------------------------------------------------------------

_ALL_DATABASES = (
    Database.SUPABASE,
    Database.CONVEX,
    Database.NEON,
    Database.SQLITE,
    Database.TURSO,
    Database.PLANETSCALE,
    Database.MONGODB,
    Database.NONE,
)
_NON_CONVEX_DATABASES = tuple(d for d in _ALL_DATABASES if d is not Database.CONVEX)

_NODE_BACKENDS = (
    BackendFramework.NONE,
    BackendFramework.EXPRESS,
    BackendFramework.FASTIFY,
    BackendFramework.NESTJS,
    BackendFramework.HONO,
    BackendFramework.ELYSIA,
)

_SPA_AUTHS = (Auth.CLERK, Auth.SUPABASE_AUTH, Auth.BETTER_AUTH, Auth.NONE)


def build_default_tables() -> CompatibilityTables:
    """Construct the built-in compatibility tables."""
    backends = [
        BackendDescriptor(
            BackendFramework.NONE, "None", "Frontend only",
            capability=BackendCapability.SKIPS_DATABASE,
        ),
        BackendDescriptor(
            BackendFramework.NEXTJS_BUILTIN, "Next.js API Routes",
            "Route handlers inside the Next.js app",
            layout=LayoutDecision.INTEGRATED,
        ),
        BackendDescriptor(
            BackendFramework.EXPRESS, "Express", "Minimal and flexible Node.js server",
            layout=LayoutDecision.SEPARATE,
        ),
        BackendDescriptor(
            BackendFramework.FASTIFY, "Fastify", "Fast, low-overhead web framework",
            layout=LayoutDecision.SEPARATE,
        ),
        BackendDescriptor(
            BackendFramework.NESTJS, "NestJS", "Structured, modular Node.js framework",
            layout=LayoutDecision.SEPARATE,
        ),
        BackendDescriptor(
            BackendFramework.HONO, "Hono", "Ultrafast web framework for any runtime",
            layout=LayoutDecision.SEPARATE,
            capability=BackendCapability.RUNTIME_SELECTABLE,
        ),
        BackendDescriptor(
            BackendFramework.ELYSIA, "Elysia", "Bun-first web framework (requires Bun)",
            layout=LayoutDecision.SEPARATE,
            capability=BackendCapability.MANDATES_PACKAGE_MANAGER,
            package_manager=PackageManager.BUN,
        ),
        BackendDescriptor(
            BackendFramework.CONVEX, "Convex", "Reactive backend-as-a-service",
            layout=LayoutDecision.INTEGRATED,
            capability=BackendCapability.SKIPS_DATABASE,
        ),
    ]
    runtimes = [
        RuntimeDescriptor(Runtime.NODE, "Node.js", "Stable, widely supported"),
        RuntimeDescriptor(
            Runtime.BUN, "Bun", "Fast all-in-one runtime",
            package_manager=PackageManager.BUN,
        ),
    ]

    return CompatibilityTables(
        framework_backends={
            Framework.NEXT: (
                BackendFramework.NONE,
                BackendFramework.NEXTJS_BUILTIN,
                *_NODE_BACKENDS[1:],
                BackendFramework.CONVEX,
            ),
            Framework.REACT: (*_NODE_BACKENDS, BackendFramework.CONVEX),
            Framework.VUE: _NODE_BACKENDS,
            Framework.ASTRO: _NODE_BACKENDS,
        },
        framework_databases={
            Framework.NEXT: _ALL_DATABASES,
            Framework.REACT: _ALL_DATABASES,
            Framework.VUE: _NON_CONVEX_DATABASES,
            Framework.ASTRO: _NON_CONVEX_DATABASES,
        },
        framework_auths={
            Framework.NEXT: (Auth.NEXT_AUTH, *_SPA_AUTHS),
            Framework.REACT: _SPA_AUTHS,
            Framework.VUE: _SPA_AUTHS,
            Framework.ASTRO: _SPA_AUTHS,
        },
        database_orms={
            Database.MONGODB: (ORM.PRISMA,),
            Database.SUPABASE: (ORM.PRISMA, ORM.DRIZZLE),
            Database.NEON: (ORM.PRISMA, ORM.DRIZZLE),
            # Narrowed to Drizzle so sqlite resolves to a single ORM automatically.
            Database.SQLITE: (ORM.DRIZZLE,),
            Database.TURSO: (ORM.PRISMA, ORM.DRIZZLE),
            Database.PLANETSCALE: (ORM.PRISMA, ORM.DRIZZLE),
            Database.CONVEX: (ORM.NONE,),
            Database.NONE: (ORM.NONE,),
        },
        backends={d.backend: d for d in backends},
        runtimes={r.runtime: r for r in runtimes},
    )


DEFAULT_TABLES = build_default_tables()


# ---------------------------------------------------------------------------
# Option labels (prompt display)
# ---------------------------------------------------------------------------

OPTION_LABELS: Mapping[Enum, tuple[str, str]] = MappingProxyType({
    Framework.NEXT: ("Next.js", "React framework with App Router"),
    Framework.REACT: ("React", "Vite-powered React SPA"),
    Framework.VUE: ("Vue", "Vite-powered Vue 3 SPA"),
    Framework.ASTRO: ("Astro", "Content-focused with islands"),
    Database.SUPABASE: ("Supabase", "PostgreSQL + Realtime + Auth"),
    Database.CONVEX: ("Convex", "Reactive backend-as-a-service"),
    Database.NEON: ("Neon", "Serverless PostgreSQL"),
    Database.SQLITE: ("SQLite", "Local embedded database"),
    Database.TURSO: ("Turso", "Edge SQLite (libSQL)"),
    Database.PLANETSCALE: ("PlanetScale", "MySQL-compatible serverless"),
    Database.MONGODB: ("MongoDB", "Document database"),
    Database.NONE: ("None", "Skip database setup"),
    ORM.PRISMA: ("Prisma", "Type-safe ORM with schema migrations"),
    ORM.DRIZZLE: ("Drizzle", "Lightweight SQL-like TypeScript ORM"),
    ORM.NONE: ("None", "No ORM"),
    Auth.NEXT_AUTH: ("NextAuth / Auth.js", "Flexible, self-hosted"),
    Auth.CLERK: ("Clerk", "Managed auth with UI components"),
    Auth.SUPABASE_AUTH: ("Supabase Auth", "Built-in with Supabase"),
    Auth.BETTER_AUTH: ("Better Auth", "Modern, flexible auth library"),
    Auth.NONE: ("None", "Skip authentication"),
    Styling.TAILWIND: ("Tailwind CSS", "Utility-first CSS"),
    Styling.TAILWIND_SHADCN: ("Tailwind + shadcn/ui", "Beautiful components"),
    Styling.CSS_MODULES: ("CSS Modules", "Scoped CSS"),
    Styling.VANILLA: ("Vanilla CSS", "Plain CSS"),
    PackageManager.PNPM: ("pnpm", "Fast, disk space efficient (recommended)"),
    PackageManager.NPM: ("npm", "Node.js default"),
    PackageManager.BUN: ("bun", "All-in-one JavaScript runtime"),
})


def label_for(value: Enum, tables: CompatibilityTables = DEFAULT_TABLES) -> tuple[str, str]:
    """Return the ``(label, hint)`` pair shown next to *value* in prompts."""
    if isinstance(value, BackendFramework):
        descriptor = tables.descriptor(value)
        return descriptor.label, descriptor.hint
    if isinstance(value, Runtime):
        runtime = tables.runtimes[value]
        return runtime.label, runtime.hint
    return OPTION_LABELS.get(value, (str(value.value), ""))
