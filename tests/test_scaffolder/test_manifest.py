"""Tests for package manifests (create_mrn_app.scaffolder.manifest).

Covers:
- Manifest serialisation (aliases, omitted optionals)
- merge_manifest precedence and immutability
- Monorepo root manifest scripts per package manager
- pnpm-workspace.yaml
"""

from __future__ import annotations

import pytest
import yaml

from create_mrn_app.resolver import DEFAULT_TABLES
from create_mrn_app.scaffolder import (
    ROOT_SCRIPT_KEYS,
    Manifest,
    build_root_manifest,
    build_workspace_file,
    merge_manifest,
    package_name,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Manifest model
# ---------------------------------------------------------------------------


class TestManifest:
    def test_to_json_uses_package_json_keys(self):
        manifest = Manifest(
            name="app",
            type="module",
            scripts={"dev": "vite"},
            dev_dependencies={"vite": "^6.0.0"},
        )
        data = manifest.to_json()
        assert data["devDependencies"] == {"vite": "^6.0.0"}
        assert "dev_dependencies" not in data
        assert data["type"] == "module"
        assert data["private"] is True
        assert data["version"] == "0.1.0"

    def test_unset_optionals_omitted(self):
        data = Manifest(name="app").to_json()
        assert "type" not in data
        assert "workspaces" not in data
        assert data["dependencies"] == {}

    def test_alias_accepted_on_input(self):
        manifest = Manifest(name="app", devDependencies={"tsx": "^4.19.0"})
        assert manifest.dev_dependencies == {"tsx": "^4.19.0"}

    def test_package_name(self, make_config):
        config = make_config(project_name="shop")
        assert package_name(config) == "shop"
        assert package_name(config, "backend") == "shop-backend"


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------


class TestMergeManifest:
    def test_backend_wins_on_collision(self):
        frontend = Manifest(
            name="app",
            scripts={"dev": "next dev", "lint": "next lint"},
            dependencies={"zod": "^3.0.0", "next": "^15.1.0"},
            dev_dependencies={"typescript": "^5.7.0"},
        )
        merged = merge_manifest(
            frontend,
            {"zod": "^3.23.0"},
            {"prisma": "^5.22.0"},
            {"db:push": "prisma db push", "lint": "eslint ."},
        )
        assert merged.dependencies == {"zod": "^3.23.0", "next": "^15.1.0"}
        assert merged.dev_dependencies == {"typescript": "^5.7.0", "prisma": "^5.22.0"}
        assert merged.scripts["lint"] == "eslint ."
        assert merged.scripts["dev"] == "next dev"
        assert merged.scripts["db:push"] == "prisma db push"

    def test_inputs_not_mutated(self):
        frontend = Manifest(name="app", dependencies={"next": "^15.1.0"})
        backend_deps = {"convex": "^1.17.0"}
        merge_manifest(frontend, backend_deps, {}, {})
        assert frontend.dependencies == {"next": "^15.1.0"}
        assert backend_deps == {"convex": "^1.17.0"}

    def test_name_and_type_kept(self):
        frontend = Manifest(name="app", type="module")
        merged = merge_manifest(frontend, {}, {}, {})
        assert merged.name == "app"
        assert merged.type == "module"


# ---------------------------------------------------------------------------
# Monorepo root
# ---------------------------------------------------------------------------


# (backend, runtime) for every separate backend, both runtimes for Hono.
_SEPARATE_BACKENDS = [
    (backend.value, runtime)
    for backend in sorted(DEFAULT_TABLES.separate_backends, key=lambda b: b.value)
    for runtime in (
        ["node", "bun"] if backend in DEFAULT_TABLES.runtime_selectable_backends else [None]
    )
]


class TestRootManifest:
    @pytest.mark.parametrize("pm", ["npm", "pnpm", "bun"])
    @pytest.mark.parametrize("backend, runtime", _SEPARATE_BACKENDS)
    def test_script_keys_fixed(self, make_config, backend, runtime, pm):
        config = make_config(
            framework="react", backend=backend, runtime=runtime, package_manager=pm
        )
        manifest = build_root_manifest(config)
        assert len(manifest.scripts) == 8
        assert tuple(manifest.scripts) == ROOT_SCRIPT_KEYS

    def test_workspaces_and_concurrently(self, make_config):
        manifest = build_root_manifest(make_config(backend="express"))
        assert manifest.workspaces == ["packages/frontend", "packages/backend"]
        assert "concurrently" in manifest.dev_dependencies
        assert manifest.dependencies == {}
        assert manifest.private is True

    def test_pnpm_filters(self, make_config):
        config = make_config(project_name="shop", backend="fastify", package_manager="pnpm")
        scripts = build_root_manifest(config).scripts
        assert scripts["dev:backend"] == "pnpm --filter shop-backend run --if-present dev"
        assert scripts["lint"] == (
            "pnpm --filter shop-frontend --filter shop-backend run --if-present lint"
        )

    def test_npm_workspaces(self, make_config):
        config = make_config(project_name="shop", backend="express", package_manager="npm")
        scripts = build_root_manifest(config).scripts
        assert scripts["build:frontend"] == (
            "npm run build --workspace=shop-frontend --if-present"
        )

    def test_bun_filters(self, make_config):
        config = make_config(project_name="shop", backend="elysia")
        scripts = build_root_manifest(config).scripts
        assert scripts["dev:frontend"] == "bun run --filter shop-frontend dev"

    def test_dev_runs_both_packages(self, make_config):
        config = make_config(project_name="shop", backend="express", package_manager="pnpm")
        scripts = build_root_manifest(config).scripts
        assert scripts["dev"].startswith("concurrently")
        assert scripts["dev:frontend"] in scripts["dev"]
        assert scripts["dev:backend"] in scripts["dev"]

    def test_build_backend_first(self, make_config):
        scripts = build_root_manifest(make_config(backend="nestjs")).scripts
        assert scripts["build"] == f"{scripts['build:backend']} && {scripts['build:frontend']}"


class TestWorkspaceFile:
    def test_pnpm(self, make_config):
        body = build_workspace_file(make_config(backend="express", package_manager="pnpm"))
        assert yaml.safe_load(body) == {"packages": ["packages/*"]}

    @pytest.mark.parametrize("pm", ["npm", "bun"])
    def test_other_package_managers(self, make_config, pm):
        assert build_workspace_file(make_config(backend="express", package_manager=pm)) is None
