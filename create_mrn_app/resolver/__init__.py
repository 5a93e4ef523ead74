"""Configuration resolution and project-layout decisions.

Quick usage::

    from create_mrn_app.resolver import Selection, classify, resolve

    config = resolve(Selection(project_name="my-app", framework="react", backend="elysia"))
    config.package_manager   # PackageManager.BUN -- Elysia mandates Bun
    classify(config.backend) # LayoutDecision.SEPARATE
"""

from .compat import (
    DEFAULT_TABLES,
    BackendCapability,
    BackendDescriptor,
    CompatibilityTables,
    RuntimeDescriptor,
    build_default_tables,
    label_for,
)
from .layout import backend_dir, classify, frontend_dir
from .models import (
    CURRENT_DIR_MARKER,
    ORM,
    Auth,
    BackendFramework,
    Database,
    Extras,
    Framework,
    LayoutDecision,
    Notice,
    NoticeKind,
    PackageManager,
    ProjectConfig,
    Runtime,
    Selection,
    Styling,
)
from .resolver import Chooser, ConfigResolver, DefaultChooser, resolve
from .validation import find_problems, validate_project_name, validate_selection

__all__ = [
    # Models
    "CURRENT_DIR_MARKER",
    "Auth",
    "BackendFramework",
    "Database",
    "Extras",
    "Framework",
    "LayoutDecision",
    "Notice",
    "NoticeKind",
    "ORM",
    "PackageManager",
    "ProjectConfig",
    "Runtime",
    "Selection",
    "Styling",
    # Tables
    "BackendCapability",
    "BackendDescriptor",
    "CompatibilityTables",
    "DEFAULT_TABLES",
    "RuntimeDescriptor",
    "build_default_tables",
    "label_for",
    # Resolution
    "Chooser",
    "ConfigResolver",
    "DefaultChooser",
    "resolve",
    "find_problems",
    "validate_project_name",
    "validate_selection",
    # Layout
    "backend_dir",
    "classify",
    "frontend_dir",
]
