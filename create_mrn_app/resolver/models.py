"""Pydantic v2 models for selections and resolved project configuration.

``Selection`` is the raw, possibly incomplete input gathered from CLI flags.
``ProjectConfig`` is the fully resolved and internally consistent result that
is threaded through the rest of a run.  Both are frozen: a selection is built
once and never mutated, and there is exactly one ``ProjectConfig`` per run.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


CURRENT_DIR_MARKER = "."


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Frontend framework."""
    NEXT = "next"
    REACT = "react"
    VUE = "vue"
    ASTRO = "astro"


class BackendFramework(str, Enum):
    """Backend framework, or ``none`` for a frontend-only project."""
    NONE = "none"
    NEXTJS_BUILTIN = "nextjs-builtin"
    EXPRESS = "express"
    FASTIFY = "fastify"
    NESTJS = "nestjs"
    HONO = "hono"
    ELYSIA = "elysia"
    CONVEX = "convex"


class Database(str, Enum):
    """Database provider."""
    SUPABASE = "supabase"
    CONVEX = "convex"
    NEON = "neon"
    SQLITE = "sqlite"
    TURSO = "turso"
    PLANETSCALE = "planetscale"
    MONGODB = "mongodb"
    NONE = "none"


class ORM(str, Enum):
    """Object-relational mapper."""
    PRISMA = "prisma"
    DRIZZLE = "drizzle"
    NONE = "none"


class Runtime(str, Enum):
    """JavaScript runtime for backends that let the user choose one."""
    NODE = "node"
    BUN = "bun"


class Auth(str, Enum):
    """Authentication provider."""
    NEXT_AUTH = "next-auth"
    CLERK = "clerk"
    SUPABASE_AUTH = "supabase-auth"
    BETTER_AUTH = "better-auth"
    NONE = "none"


class Styling(str, Enum):
    """Styling system."""
    TAILWIND = "tailwind"
    TAILWIND_SHADCN = "tailwind-shadcn"
    CSS_MODULES = "css-modules"
    VANILLA = "vanilla"


class PackageManager(str, Enum):
    """Package manager used to install and run the generated project."""
    NPM = "npm"
    PNPM = "pnpm"
    BUN = "bun"


class LayoutDecision(str, Enum):
    """Where the backend code lives relative to the frontend package."""
    NONE = "none"
    INTEGRATED = "integrated"
    SEPARATE = "separate"


class NoticeKind(str, Enum):
    """Category of an informational notice emitted during resolution."""
    PACKAGE_MANAGER_FORCED = "package-manager-forced"
    ORM_AUTO_SELECTED = "orm-auto-selected"
    DATABASE_SKIPPED = "database-skipped"


# ---------------------------------------------------------------------------
# Selection (raw input)
# ---------------------------------------------------------------------------

class Selection(BaseModel):
    """Raw user selections.  Every field is optional."""

    model_config = ConfigDict(frozen=True)

    project_name: Optional[str] = Field(
        default=None, description="Project name, or '.' for the current directory"
    )
    framework: Optional[Framework] = None
    backend: Optional[BackendFramework] = None
    database: Optional[Database] = None
    orm: Optional[ORM] = None
    runtime: Optional[Runtime] = Field(
        default=None, description="Only meaningful for runtime-selectable backends"
    )
    auth: Optional[Auth] = None
    styling: Optional[Styling] = None
    package_manager: Optional[PackageManager] = None

    typescript: Optional[bool] = None
    eslint: Optional[bool] = None
    testing: Optional[bool] = None
    playwright: Optional[bool] = None
    docker: Optional[bool] = None


# ---------------------------------------------------------------------------
# Resolved configuration
# ---------------------------------------------------------------------------

class Extras(BaseModel):
    """Optional tooling switched on for the generated project."""

    model_config = ConfigDict(frozen=True)

    typescript: bool = True
    eslint: bool = True
    testing: bool = False
    playwright: bool = False
    docker: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def prettier(self) -> bool:
        """Prettier always travels with ESLint."""
        return self.eslint


class ProjectConfig(BaseModel):
    """Fully resolved, internally consistent project configuration."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Name used on disk and in manifests")
    in_current_dir: bool = Field(
        default=False, description="Write files in place instead of a new subdirectory"
    )
    framework: Framework
    backend: BackendFramework = BackendFramework.NONE
    database: Database = Database.NONE
    orm: ORM = ORM.NONE
    auth: Auth = Auth.NONE
    styling: Styling = Styling.TAILWIND
    package_manager: PackageManager = PackageManager.PNPM
    runtime: Optional[Runtime] = Field(
        default=None, description="Present only for runtime-selectable backends"
    )
    extras: Extras = Field(default_factory=Extras)

    @property
    def has_tailwind(self) -> bool:
        return self.styling in (Styling.TAILWIND, Styling.TAILWIND_SHADCN)


class Notice(BaseModel):
    """Informational message produced when the resolver overrides or auto-selects a value."""

    model_config = ConfigDict(frozen=True)

    kind: NoticeKind
    message: str
