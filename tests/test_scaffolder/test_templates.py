"""Tests for template rendering (create_mrn_app.scaffolder.templates).

Covers:
- Every template in the catalog renders with a complete context
- Custom template directories
- render_to_file writes through parent directories
- Custom filters
- Database-specific ORM output
"""

from __future__ import annotations

from pathlib import Path

import pytest

from create_mrn_app.scaffolder import TemplateRenderer
from create_mrn_app.scaffolder.templates import _DEFAULT_TEMPLATE_DIR, _pascal_case_filter


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit

_ALL_TEMPLATES = sorted(
    p.relative_to(_DEFAULT_TEMPLATE_DIR).as_posix() for p in _DEFAULT_TEMPLATE_DIR.rglob("*.j2")
)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class TestCatalogRenders:
    def test_catalog_is_not_empty(self):
        assert len(_ALL_TEMPLATES) > 50

    @pytest.mark.parametrize("template_path", _ALL_TEMPLATES)
    def test_renders(self, renderer, full_context, template_path):
        output = renderer.render(template_path, full_context)
        assert output.strip()


class TestCustomTemplateDir:
    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "greeting.j2").write_text("Hello {{ project_name | pascal_case }}\n")
        custom = TemplateRenderer(tmp_path)
        assert custom.render("greeting.j2", {"project_name": "my-app"}) == "Hello MyApp\n"


class TestRenderToFile:
    @pytest.mark.asyncio
    async def test_creates_parents(self, renderer, full_context, tmp_path: Path):
        out = tmp_path / "deep" / "nested" / ".gitignore"
        written = await renderer.render_to_file("shared/gitignore.j2", out, full_context)
        assert written == out
        assert "node_modules" in out.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class TestFilters:
    @pytest.mark.parametrize(
        "value, expected",
        [("item", "Item"), ("user-profile", "UserProfile"), ("order_line", "OrderLine")],
    )
    def test_pascal_case(self, value, expected):
        assert _pascal_case_filter(value) == expected


# ---------------------------------------------------------------------------
# Content spot checks
# ---------------------------------------------------------------------------


class TestOrmTemplates:
    @pytest.mark.parametrize(
        "database, provider",
        [
            ("neon", "postgresql"),
            ("supabase", "postgresql"),
            ("mongodb", "mongodb"),
            ("planetscale", "mysql"),
            ("turso", "sqlite"),
        ],
    )
    def test_prisma_provider(self, renderer, full_context, database, provider):
        output = renderer.render("orm/schema.prisma.j2", {**full_context, "database": database})
        assert f'provider = "{provider}"' in output

    def test_prisma_mongodb_object_ids(self, renderer, full_context):
        output = renderer.render("orm/schema.prisma.j2", {**full_context, "database": "mongodb"})
        assert "@db.ObjectId" in output

    def test_planetscale_relation_mode(self, renderer, full_context):
        output = renderer.render(
            "orm/schema.prisma.j2", {**full_context, "database": "planetscale"}
        )
        assert 'relationMode = "prisma"' in output

    @pytest.mark.parametrize(
        "database, driver",
        [
            ("sqlite", "drizzle-orm/better-sqlite3"),
            ("turso", "drizzle-orm/libsql"),
            ("planetscale", "drizzle-orm/planetscale-serverless"),
            ("neon", "drizzle-orm/neon-http"),
        ],
    )
    def test_drizzle_driver(self, renderer, full_context, database, driver):
        output = renderer.render("orm/drizzle-client.j2", {**full_context, "database": database})
        assert driver in output


class TestContextDrivenContent:
    def test_hono_node_imports_use_js_suffix(self, renderer, full_context):
        output = renderer.render("backend/hono/index.j2", full_context)
        assert "@hono/node-server" in output
        assert './routes/health.js"' in output

    def test_hono_bun_exports_fetch(self, renderer, full_context):
        output = renderer.render("backend/hono/index.j2", {**full_context, "is_bun": True})
        assert "@hono/node-server" not in output
        assert './routes/health"' in output

    def test_env_lists_next_auth_secrets(self, renderer, full_context):
        output = renderer.render("shared/env.j2", full_context)
        assert "NEXTAUTH_SECRET=" in output
        assert "NEXT_PUBLIC_API_URL=http://localhost:4000" in output

    def test_env_sqlite_for_integrated(self, renderer, full_context):
        context = {**full_context, "integrated": True, "separate": False, "database": "sqlite"}
        output = renderer.render("shared/env.j2", context)
        assert "DATABASE_URL=file:./sqlite.db" in output

    def test_readme_names_stack(self, renderer, full_context):
        output = renderer.render("project/README.md.j2", full_context)
        assert "# ctx-app" in output
        assert "Hono" in output
        assert full_context["run_dev"] in output

    def test_collection_route_uses_model_name(self, renderer, full_context):
        context = {**full_context, "resource": "users", "model": "user"}
        output = renderer.render("backend/nextjs/collection-route.j2", context)
        assert "User" in output
