"""Project file generation.

``ProjectGenerator`` writes a complete project for a resolved
``ProjectConfig``: the frontend and backend template catalogs, the
``package.json`` manifests for the chosen layout and the workspace files.
"""

from .backends import BACKEND_GENERATORS, BackendGenerator, get_backend_generator
from .catalog import CatalogGenerator
from .frontends import (
    FRONTEND_GENERATORS,
    SHADCN_PACKAGES,
    FrontendGenerator,
    get_frontend_generator,
)
from .generator import ProjectGenerator
from .manifest import (
    ROOT_SCRIPT_KEYS,
    Manifest,
    build_root_manifest,
    build_workspace_file,
    merge_manifest,
    package_name,
)
from .templates import TemplateRenderer

__all__ = [
    # Orchestration
    "ProjectGenerator",
    "TemplateRenderer",
    # Catalog
    "CatalogGenerator",
    "BACKEND_GENERATORS",
    "BackendGenerator",
    "get_backend_generator",
    "FRONTEND_GENERATORS",
    "FrontendGenerator",
    "SHADCN_PACKAGES",
    "get_frontend_generator",
    # Manifests
    "Manifest",
    "ROOT_SCRIPT_KEYS",
    "build_root_manifest",
    "build_workspace_file",
    "merge_manifest",
    "package_name",
]
