"""Tests for the static compatibility tables (create_mrn_app.resolver.compat).

Covers:
- Backend / runtime descriptor construction checks
- Immutability of the default tables
- Capability sets derived from the descriptors
- Allow-list lookups per framework and database
- Prompt labels
"""

from __future__ import annotations

import dataclasses

import pytest

from create_mrn_app.resolver import (
    DEFAULT_TABLES,
    ORM,
    Auth,
    BackendCapability,
    BackendDescriptor,
    BackendFramework,
    CompatibilityTables,
    Database,
    Framework,
    LayoutDecision,
    PackageManager,
    Runtime,
    build_default_tables,
    label_for,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


class TestBackendDescriptor:
    def test_mandating_backend_requires_package_manager(self):
        with pytest.raises(ValueError, match="mandates a package manager"):
            BackendDescriptor(
                BackendFramework.ELYSIA, "Elysia", "",
                capability=BackendCapability.MANDATES_PACKAGE_MANAGER,
            )

    def test_package_manager_without_capability_rejected(self):
        with pytest.raises(ValueError, match="without"):
            BackendDescriptor(
                BackendFramework.EXPRESS, "Express", "",
                package_manager=PackageManager.BUN,
            )

    def test_package_manager_with_other_capability_rejected(self):
        with pytest.raises(ValueError):
            BackendDescriptor(
                BackendFramework.HONO, "Hono", "",
                capability=BackendCapability.RUNTIME_SELECTABLE,
                package_manager=PackageManager.BUN,
            )

    def test_descriptor_is_frozen(self):
        descriptor = DEFAULT_TABLES.descriptor(BackendFramework.EXPRESS)
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.label = "Changed"  # type: ignore[misc]

    def test_capability_flags_are_exclusive(self):
        for descriptor in DEFAULT_TABLES.backends.values():
            flags = [
                descriptor.mandates_package_manager,
                descriptor.runtime_selectable,
                descriptor.skips_database,
            ]
            assert sum(flags) <= 1, descriptor.backend


# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------


class TestDefaultTables:
    def test_mappings_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_TABLES.framework_backends[Framework.VUE] = ()  # type: ignore[index]

    def test_build_is_deterministic(self):
        rebuilt = build_default_tables()
        assert dict(rebuilt.framework_backends) == dict(DEFAULT_TABLES.framework_backends)
        assert dict(rebuilt.database_orms) == dict(DEFAULT_TABLES.database_orms)

    def test_every_backend_has_descriptor(self):
        for backend in BackendFramework:
            assert DEFAULT_TABLES.descriptor(backend).backend is backend

    def test_separate_backends(self):
        assert DEFAULT_TABLES.separate_backends == {
            BackendFramework.EXPRESS,
            BackendFramework.FASTIFY,
            BackendFramework.NESTJS,
            BackendFramework.HONO,
            BackendFramework.ELYSIA,
        }

    def test_integrated_backends(self):
        assert DEFAULT_TABLES.integrated_backends == {
            BackendFramework.NEXTJS_BUILTIN,
            BackendFramework.CONVEX,
        }

    def test_only_elysia_mandates_bun(self):
        assert DEFAULT_TABLES.package_manager_mandating_backends == {BackendFramework.ELYSIA}
        assert DEFAULT_TABLES.descriptor(BackendFramework.ELYSIA).package_manager is PackageManager.BUN

    def test_only_hono_selects_runtime(self):
        assert DEFAULT_TABLES.runtime_selectable_backends == {BackendFramework.HONO}

    def test_database_skipping_backends(self):
        assert DEFAULT_TABLES.database_skipping_backends == {
            BackendFramework.NONE,
            BackendFramework.CONVEX,
        }

    def test_bun_runtime_implies_bun(self):
        assert DEFAULT_TABLES.runtimes[Runtime.BUN].package_manager is PackageManager.BUN
        assert DEFAULT_TABLES.runtimes[Runtime.NODE].package_manager is None

    def test_rejects_backend_without_descriptor(self):
        with pytest.raises(ValueError, match="No descriptor"):
            CompatibilityTables(
                framework_backends={f: (BackendFramework.NONE,) for f in Framework},
                framework_databases={f: (Database.NONE,) for f in Framework},
                framework_auths={f: (Auth.NONE,) for f in Framework},
                database_orms={Database.NONE: (ORM.NONE,)},
                backends={},
                runtimes={},
            )


# ---------------------------------------------------------------------------
# Allow-lists
# ---------------------------------------------------------------------------


class TestAllowLists:
    def test_nextjs_builtin_only_for_next(self):
        for framework in Framework:
            allowed = BackendFramework.NEXTJS_BUILTIN in DEFAULT_TABLES.backends_for(framework)
            assert allowed is (framework is Framework.NEXT)

    def test_convex_backend_for_react_and_next(self):
        assert BackendFramework.CONVEX in DEFAULT_TABLES.backends_for(Framework.REACT)
        assert BackendFramework.CONVEX not in DEFAULT_TABLES.backends_for(Framework.VUE)

    def test_convex_database_not_for_vue_or_astro(self):
        assert Database.CONVEX not in DEFAULT_TABLES.databases_for(Framework.VUE)
        assert Database.CONVEX not in DEFAULT_TABLES.databases_for(Framework.ASTRO)

    def test_next_auth_only_for_next(self):
        assert Auth.NEXT_AUTH in DEFAULT_TABLES.auths_for(Framework.NEXT)
        assert Auth.NEXT_AUTH not in DEFAULT_TABLES.auths_for(Framework.REACT)

    @pytest.mark.parametrize(
        "database, orms",
        [
            (Database.MONGODB, (ORM.PRISMA,)),
            (Database.SQLITE, (ORM.DRIZZLE,)),
            (Database.NEON, (ORM.PRISMA, ORM.DRIZZLE)),
            (Database.CONVEX, (ORM.NONE,)),
            (Database.NONE, (ORM.NONE,)),
        ],
    )
    def test_database_orms(self, database, orms):
        assert DEFAULT_TABLES.orms_for(database) == orms

    def test_every_allowed_backend_layout_is_known(self):
        for framework in Framework:
            for backend in DEFAULT_TABLES.backends_for(framework):
                assert DEFAULT_TABLES.descriptor(backend).layout in LayoutDecision


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


class TestLabelFor:
    def test_backend_label_from_descriptor(self):
        assert label_for(BackendFramework.ELYSIA)[0] == "Elysia"

    def test_runtime_label(self):
        assert label_for(Runtime.BUN) == ("Bun", "Fast all-in-one runtime")

    def test_option_label(self):
        assert label_for(Framework.NEXT)[0] == "Next.js"
        assert label_for(PackageManager.PNPM)[1].endswith("(recommended)")
