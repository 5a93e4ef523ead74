"""Frontend entries of the template catalog.

One generator per frontend framework.  ``FrontendGenerator`` holds everything
the frameworks share (ignore/env files, Tailwind, ESLint + Prettier, Vitest,
Playwright, Docker); subclasses add their own scripts, dependencies and
source files through the ``_framework_*`` hooks.
"""

from __future__ import annotations

from typing import Any, ClassVar

from ..errors import UnknownOptionError
from ..resolver.models import (
    Auth,
    BackendFramework,
    Database,
    Framework,
    LayoutDecision,
    ProjectConfig,
    Styling,
)
from .catalog import PRETTIER_CONFIG, CatalogGenerator
from .templates import TemplateRenderer

TAILWIND_DEV_DEPENDENCIES = {
    "tailwindcss": "^3.4.0",
    "postcss": "^8.4.0",
    "autoprefixer": "^10.4.0",
}

SHADCN_PACKAGES = ["class-variance-authority", "clsx", "tailwind-merge", "lucide-react"]


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class FrontendGenerator(CatalogGenerator):
    """Shared frontend behaviour.  Subclasses set the class attributes below."""

    framework: ClassVar[Framework]
    port: ClassVar[int] = 5173
    env_prefix: ClassVar[str] = "VITE_"
    env_files: ClassVar[tuple[str, ...]] = (".env.example", ".env.local")
    content_paths: ClassVar[tuple[str, ...]] = ()
    tailwind_config_name: ClassVar[str] = "tailwind.config.js"
    uses_postcss: ClassVar[bool] = True
    source_dir: ClassVar[str] = "src"

    @property
    def uses_convex(self) -> bool:
        return (
            self.config.backend is BackendFramework.CONVEX
            or self.config.database is Database.CONVEX
        )

    @property
    def uses_supabase(self) -> bool:
        return (
            self.config.database is Database.SUPABASE
            or self.config.auth is Auth.SUPABASE_AUTH
        )

    @property
    def uses_shadcn(self) -> bool:
        """shadcn/ui only targets the React frameworks."""
        return self.config.styling is Styling.TAILWIND_SHADCN and self.framework in (
            Framework.NEXT,
            Framework.REACT,
        )

    @property
    def jsx(self) -> str:
        return "tsx" if self.config.extras.typescript else "jsx"

    # -- Hooks -------------------------------------------------------------

    def _framework_scripts(self) -> dict[str, str]:
        return {}

    def _framework_dependencies(self) -> dict[str, str]:
        return {}

    def _framework_dev_dependencies(self) -> dict[str, str]:
        return {}

    def _framework_templates(self) -> list[tuple[str, str]]:
        return []

    def _framework_json(self) -> dict[str, dict[str, Any]]:
        return {}

    def _testing_dev_dependencies(self) -> dict[str, str]:
        return {}

    # -- Declarations ------------------------------------------------------

    def scripts(self) -> dict[str, str]:
        extras = self.config.extras
        scripts = self._framework_scripts()
        if extras.testing:
            scripts["test"] = "vitest"
            scripts["test:ui"] = "vitest --ui"
        if extras.playwright:
            scripts["test:e2e"] = "playwright test"
            scripts["test:e2e:ui"] = "playwright test --ui"
        if self.uses_convex and "dev" in scripts:
            scripts["dev"] = f"convex dev --once && {scripts['dev']}"
            scripts["convex"] = "convex dev"
        return scripts

    def dependencies(self) -> dict[str, str]:
        deps = self._framework_dependencies()
        if self.uses_convex:
            deps["convex"] = "^1.17.0"
        return deps

    def dev_dependencies(self) -> dict[str, str]:
        extras = self.config.extras
        dev = self._framework_dev_dependencies()
        if self.config.has_tailwind and self.uses_postcss:
            dev.update(TAILWIND_DEV_DEPENDENCIES)
        if extras.eslint:
            dev["eslint"] = "^9.17.0"
            dev["prettier"] = "^3.4.0"
        if extras.testing:
            dev["vitest"] = "^2.1.0"
            dev["jsdom"] = "^25.0.0"
            dev.update(self._testing_dev_dependencies())
        if extras.playwright:
            dev["@playwright/test"] = "^1.49.0"
        return dev

    def templates(self) -> list[tuple[str, str]]:
        config = self.config
        extras = config.extras
        files: list[tuple[str, str]] = [("shared/gitignore.j2", ".gitignore")]
        files += [("shared/env.j2", name) for name in self.env_files]
        files += self._framework_templates()

        if config.has_tailwind:
            files.append(("shared/tailwind.config.j2", self.tailwind_config_name))
            if self.uses_postcss:
                files.append(("shared/postcss.config.j2", "postcss.config.js"))
        if self.uses_shadcn:
            lib_dir = "lib" if self.framework is Framework.NEXT else "src/lib"
            files.append(("shared/shadcn-utils.j2", f"{lib_dir}/utils.{self.ext}"))
        if extras.testing:
            files.append(("shared/vitest.config.j2", f"vitest.config.{self.ext}"))
        if extras.playwright:
            files.append(("shared/playwright.config.j2", "playwright.config.ts"))
            files.append(("shared/example.spec.j2", "e2e/example.spec.ts"))
        if extras.docker:
            files.append(("shared/Dockerfile.j2", "Dockerfile"))
            if self.layout is not LayoutDecision.SEPARATE:
                files.append(("shared/docker-compose.yml.j2", "docker-compose.yml"))
        return files

    def json_files(self) -> dict[str, dict[str, Any]]:
        files = self._framework_json()
        if self.config.extras.prettier:
            files[".prettierrc"] = dict(PRETTIER_CONFIG)
        if self.uses_shadcn:
            files["components.json"] = self._shadcn_config()
        return files

    def extra_context(self) -> dict[str, Any]:
        return {
            "frontend_port": self.port,
            "env_prefix": self.env_prefix,
            "content_paths": list(self.content_paths),
            "uses_convex": self.uses_convex,
            "uses_supabase": self.uses_supabase,
            "jsx": self.jsx,
            "ext": self.ext,
            "source_dir": self.source_dir,
        }

    def shadcn_packages(self) -> list[str]:
        """Runtime helpers added after install for shadcn/ui styling."""
        if not self.uses_shadcn:
            return []
        return list(SHADCN_PACKAGES)

    def _shadcn_config(self) -> dict[str, Any]:
        is_next = self.framework is Framework.NEXT
        return {
            "$schema": "https://ui.shadcn.com/schema.json",
            "style": "new-york",
            "rsc": is_next,
            "tsx": self.config.extras.typescript,
            "tailwind": {
                "config": self.tailwind_config_name,
                "css": "app/globals.css" if is_next else "src/index.css",
                "baseColor": "neutral",
                "cssVariables": True,
            },
            "aliases": {
                "components": "@/components",
                "utils": "@/lib/utils",
                "ui": "@/components/ui",
            },
        }


# ---------------------------------------------------------------------------
# Next.js
# ---------------------------------------------------------------------------


class NextGenerator(FrontendGenerator):
    key = "next"
    label = "Next.js"
    framework = Framework.NEXT
    port = 3000
    env_prefix = "NEXT_PUBLIC_"
    content_paths = (
        "./app/**/*.{js,ts,jsx,tsx,mdx}",
        "./components/**/*.{js,ts,jsx,tsx,mdx}",
    )
    tailwind_config_name = "tailwind.config.js"
    source_dir = "app"

    def _framework_scripts(self) -> dict[str, str]:
        return {
            "dev": "next dev",
            "build": "next build",
            "start": "next start",
            "lint": "next lint",
        }

    def _framework_dependencies(self) -> dict[str, str]:
        config = self.config
        deps = {"next": "^15.1.0", "react": "^19.0.0", "react-dom": "^19.0.0"}
        if config.auth is Auth.NEXT_AUTH:
            deps["next-auth"] = "^5.0.0-beta.25"
        elif config.auth is Auth.CLERK:
            deps["@clerk/nextjs"] = "^6.9.0"
        elif config.auth is Auth.BETTER_AUTH:
            deps["better-auth"] = "^1.1.0"
        if self.uses_supabase:
            deps["@supabase/supabase-js"] = "^2.47.0"
            deps["@supabase/ssr"] = "^0.5.0"
        return deps

    def _framework_dev_dependencies(self) -> dict[str, str]:
        dev: dict[str, str] = {}
        if self.config.extras.typescript:
            dev.update({
                "typescript": "^5.7.0",
                "@types/node": "^22.10.0",
                "@types/react": "^19.0.0",
                "@types/react-dom": "^19.0.0",
            })
        if self.config.extras.eslint:
            dev["eslint-config-next"] = "^15.1.0"
        return dev

    def _testing_dev_dependencies(self) -> dict[str, str]:
        return {"@vitejs/plugin-react": "^4.3.0", "@testing-library/react": "^16.1.0"}

    def _framework_templates(self) -> list[tuple[str, str]]:
        config = self.config
        ext, jsx = self.ext, self.jsx
        files = [
            ("next/next.config.j2", f"next.config.{'ts' if config.extras.typescript else 'mjs'}"),
            ("next/layout.j2", f"app/layout.{jsx}"),
            ("next/page.j2", f"app/page.{jsx}"),
            ("shared/globals.css.j2", "app/globals.css"),
        ]
        if config.styling is Styling.CSS_MODULES:
            files.append(("shared/page.module.css.j2", "app/page.module.css"))
        if self.uses_convex:
            files.append(("next/convex-provider.j2", f"components/providers/convex-provider.{jsx}"))
        if self.uses_supabase:
            files.append(("next/supabase-client.j2", f"lib/supabase/client.{ext}"))
            files.append(("next/supabase-server.j2", f"lib/supabase/server.{ext}"))
        if config.database is Database.CONVEX:
            files.append(("backend/convex/schema.j2", "convex/schema.ts"))

        if config.auth is Auth.NEXT_AUTH:
            files.append(("next/auth/next-auth.j2", f"lib/auth.{ext}"))
            files.append(("next/auth/next-auth-route.j2", f"app/api/auth/[...nextauth]/route.{ext}"))
        elif config.auth is Auth.CLERK:
            files.append(("next/auth/clerk-middleware.j2", f"middleware.{ext}"))
        elif config.auth is Auth.BETTER_AUTH:
            files.append(("next/auth/better-auth.j2", f"lib/auth.{ext}"))
            files.append(("next/auth/better-auth-route.j2", f"app/api/auth/[...all]/route.{ext}"))
        return files

    def _framework_json(self) -> dict[str, dict[str, Any]]:
        files: dict[str, dict[str, Any]] = {}
        if self.config.extras.typescript:
            files["tsconfig.json"] = {
                "compilerOptions": {
                    "target": "ES2017",
                    "lib": ["dom", "dom.iterable", "esnext"],
                    "allowJs": True,
                    "skipLibCheck": True,
                    "strict": True,
                    "noEmit": True,
                    "esModuleInterop": True,
                    "module": "esnext",
                    "moduleResolution": "bundler",
                    "resolveJsonModule": True,
                    "isolatedModules": True,
                    "jsx": "preserve",
                    "incremental": True,
                    "plugins": [{"name": "next"}],
                    "paths": {"@/*": ["./*"]},
                },
                "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
                "exclude": ["node_modules"],
            }
        if self.config.extras.eslint:
            extends = ["next/core-web-vitals"]
            if self.config.extras.typescript:
                extends.append("next/typescript")
            files[".eslintrc.json"] = {"extends": extends}
        return files


# ---------------------------------------------------------------------------
# React (Vite)
# ---------------------------------------------------------------------------


class ReactGenerator(FrontendGenerator):
    key = "react"
    label = "React"
    framework = Framework.REACT
    content_paths = ("./index.html", "./src/**/*.{js,ts,jsx,tsx}")

    def _framework_scripts(self) -> dict[str, str]:
        scripts = {
            "dev": "vite",
            "build": "tsc -b && vite build" if self.config.extras.typescript else "vite build",
            "preview": "vite preview",
        }
        if self.config.extras.eslint:
            scripts["lint"] = "eslint ."
        return scripts

    def _framework_dependencies(self) -> dict[str, str]:
        config = self.config
        deps = {"react": "^19.0.0", "react-dom": "^19.0.0"}
        if self.uses_supabase:
            deps["@supabase/supabase-js"] = "^2.47.0"
        if config.auth is Auth.CLERK:
            deps["@clerk/clerk-react"] = "^5.18.0"
        elif config.auth is Auth.BETTER_AUTH:
            deps["better-auth"] = "^1.1.0"
        return deps

    def _framework_dev_dependencies(self) -> dict[str, str]:
        extras = self.config.extras
        dev = {"vite": "^6.0.0", "@vitejs/plugin-react": "^4.3.0"}
        if extras.typescript:
            dev.update({
                "typescript": "^5.7.0",
                "@types/react": "^19.0.0",
                "@types/react-dom": "^19.0.0",
            })
        if extras.eslint:
            dev.update({
                "@eslint/js": "^9.17.0",
                "eslint-plugin-react-hooks": "^5.1.0",
                "eslint-plugin-react-refresh": "^0.4.0",
                "globals": "^15.0.0",
            })
            if extras.typescript:
                dev["typescript-eslint"] = "^8.18.0"
        return dev

    def _testing_dev_dependencies(self) -> dict[str, str]:
        return {"@testing-library/react": "^16.1.0"}

    def _framework_templates(self) -> list[tuple[str, str]]:
        config = self.config
        ext, jsx = self.ext, self.jsx
        files = [
            ("react/index.html.j2", "index.html"),
            ("react/main.j2", f"src/main.{jsx}"),
            ("react/App.j2", f"src/App.{jsx}"),
            ("shared/globals.css.j2", "src/index.css"),
            ("react/vite.config.j2", f"vite.config.{ext}"),
        ]
        if config.extras.typescript:
            files.append(("react/vite-env.d.ts.j2", "src/vite-env.d.ts"))
        if config.styling is Styling.CSS_MODULES:
            files.append(("shared/page.module.css.j2", "src/App.module.css"))
        if config.extras.eslint:
            files.append(("shared/eslint.config.j2", "eslint.config.js"))
        if self.uses_supabase:
            files.append(("shared/supabase-client.j2", f"src/lib/supabase.{ext}"))
        if self.uses_convex:
            files.append(("react/convex-provider.j2", f"src/ConvexClientProvider.{jsx}"))
        if config.database is Database.CONVEX:
            files.append(("backend/convex/schema.j2", "convex/schema.ts"))
        return files

    def _framework_json(self) -> dict[str, dict[str, Any]]:
        if not self.config.extras.typescript:
            return {}
        return {
            "tsconfig.json": {
                "compilerOptions": {
                    "target": "ES2020",
                    "useDefineForClassFields": True,
                    "lib": ["ES2020", "DOM", "DOM.Iterable"],
                    "module": "ESNext",
                    "skipLibCheck": True,
                    "moduleResolution": "bundler",
                    "allowImportingTsExtensions": True,
                    "isolatedModules": True,
                    "moduleDetection": "force",
                    "noEmit": True,
                    "jsx": "react-jsx",
                    "strict": True,
                    "noUnusedLocals": True,
                    "noUnusedParameters": True,
                    "noFallthroughCasesInSwitch": True,
                    "baseUrl": ".",
                    "paths": {"@/*": ["./src/*"]},
                },
                "include": ["src"],
                "references": [{"path": "./tsconfig.node.json"}],
            },
            "tsconfig.node.json": _node_tsconfig(),
        }


# ---------------------------------------------------------------------------
# Vue (Vite)
# ---------------------------------------------------------------------------


class VueGenerator(FrontendGenerator):
    key = "vue"
    label = "Vue.js"
    framework = Framework.VUE
    content_paths = ("./index.html", "./src/**/*.{vue,js,ts,jsx,tsx}")

    def _framework_scripts(self) -> dict[str, str]:
        scripts = {
            "dev": "vite",
            "build": "vue-tsc -b && vite build" if self.config.extras.typescript else "vite build",
            "preview": "vite preview",
        }
        if self.config.extras.eslint:
            scripts["lint"] = "eslint ."
        return scripts

    def _framework_dependencies(self) -> dict[str, str]:
        config = self.config
        deps = {"vue": "^3.5.0"}
        if self.uses_supabase:
            deps["@supabase/supabase-js"] = "^2.47.0"
        if config.auth is Auth.CLERK:
            deps["vue-clerk"] = "^0.6.0"
        elif config.auth is Auth.BETTER_AUTH:
            deps["better-auth"] = "^1.1.0"
        return deps

    def _framework_dev_dependencies(self) -> dict[str, str]:
        extras = self.config.extras
        dev = {"vite": "^6.0.0", "@vitejs/plugin-vue": "^5.2.0"}
        if extras.typescript:
            dev["typescript"] = "^5.7.0"
            dev["vue-tsc"] = "^2.2.0"
        if extras.eslint:
            dev["eslint-plugin-vue"] = "^9.32.0"
            if extras.typescript:
                dev["@vue/eslint-config-typescript"] = "^14.2.0"
        return dev

    def _testing_dev_dependencies(self) -> dict[str, str]:
        return {"@vue/test-utils": "^2.4.0"}

    def _framework_templates(self) -> list[tuple[str, str]]:
        config = self.config
        ext = self.ext
        files = [
            ("vue/index.html.j2", "index.html"),
            ("vue/main.j2", f"src/main.{ext}"),
            ("vue/App.vue.j2", "src/App.vue"),
            ("shared/globals.css.j2", "src/style.css"),
            ("vue/vite.config.j2", f"vite.config.{ext}"),
        ]
        if config.extras.typescript:
            files.append(("vue/env.d.ts.j2", "src/env.d.ts"))
        if config.extras.eslint:
            files.append(("shared/eslint.config.j2", "eslint.config.js"))
        if self.uses_supabase:
            files.append(("shared/supabase-client.j2", f"src/lib/supabase.{ext}"))
        return files

    def _framework_json(self) -> dict[str, dict[str, Any]]:
        if not self.config.extras.typescript:
            return {}
        return {
            "tsconfig.json": {
                "files": [],
                "references": [
                    {"path": "./tsconfig.app.json"},
                    {"path": "./tsconfig.node.json"},
                ],
            },
            "tsconfig.app.json": {
                "compilerOptions": {
                    "target": "ES2020",
                    "useDefineForClassFields": True,
                    "module": "ESNext",
                    "lib": ["ES2020", "DOM", "DOM.Iterable"],
                    "skipLibCheck": True,
                    "moduleResolution": "bundler",
                    "allowImportingTsExtensions": True,
                    "isolatedModules": True,
                    "moduleDetection": "force",
                    "noEmit": True,
                    "jsx": "preserve",
                    "strict": True,
                    "baseUrl": ".",
                    "paths": {"@/*": ["./src/*"]},
                },
                "include": ["src/**/*.ts", "src/**/*.tsx", "src/**/*.vue"],
            },
            "tsconfig.node.json": _node_tsconfig(),
        }


# ---------------------------------------------------------------------------
# Astro
# ---------------------------------------------------------------------------


class AstroGenerator(FrontendGenerator):
    key = "astro"
    label = "Astro"
    framework = Framework.ASTRO
    port = 4321
    env_prefix = "PUBLIC_"
    env_files = (".env.example", ".env")
    content_paths = ("./src/**/*.{astro,html,js,jsx,md,mdx,svelte,ts,tsx,vue}",)
    tailwind_config_name = "tailwind.config.mjs"
    uses_postcss = False

    def _framework_scripts(self) -> dict[str, str]:
        scripts = {
            "dev": "astro dev",
            "build": "astro build",
            "preview": "astro preview",
            "astro": "astro",
        }
        if self.config.extras.eslint:
            scripts["lint"] = "eslint ."
        return scripts

    def _framework_dependencies(self) -> dict[str, str]:
        config = self.config
        deps = {"astro": "^5.1.0"}
        if config.has_tailwind:
            deps["@astrojs/tailwind"] = "^5.1.0"
            deps["tailwindcss"] = "^3.4.0"
        if self.uses_supabase:
            deps["@supabase/supabase-js"] = "^2.47.0"
        if config.auth is Auth.CLERK:
            deps["@clerk/astro"] = "^1.4.0"
        elif config.auth is Auth.BETTER_AUTH:
            deps["better-auth"] = "^1.1.0"
        return deps

    def _framework_dev_dependencies(self) -> dict[str, str]:
        extras = self.config.extras
        dev: dict[str, str] = {}
        if extras.typescript:
            dev["typescript"] = "^5.7.0"
        if extras.eslint:
            dev["eslint-plugin-astro"] = "^1.3.0"
            dev["prettier-plugin-astro"] = "^0.14.0"
        return dev

    def _framework_templates(self) -> list[tuple[str, str]]:
        config = self.config
        files = [
            ("astro/astro.config.j2", "astro.config.mjs"),
            ("astro/Layout.astro.j2", "src/layouts/Layout.astro"),
            ("astro/index.astro.j2", "src/pages/index.astro"),
            ("shared/globals.css.j2", "src/styles/global.css"),
        ]
        if config.extras.typescript:
            files.append(("astro/env.d.ts.j2", "src/env.d.ts"))
        if config.extras.eslint:
            files.append(("shared/eslint.config.j2", "eslint.config.js"))
        if self.uses_supabase:
            files.append(("shared/supabase-client.j2", f"src/lib/supabase.{self.ext}"))
        return files

    def _framework_json(self) -> dict[str, dict[str, Any]]:
        if not self.config.extras.typescript:
            return {}
        return {
            "tsconfig.json": {
                "extends": "astro/tsconfigs/strict",
                "include": [".astro/types.d.ts", "**/*"],
                "exclude": ["dist"],
                "compilerOptions": {"baseUrl": ".", "paths": {"@/*": ["./src/*"]}},
            }
        }

    def json_files(self) -> dict[str, dict[str, Any]]:
        files = super().json_files()
        if ".prettierrc" in files:
            files[".prettierrc"]["plugins"] = ["prettier-plugin-astro"]
        return files


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _node_tsconfig() -> dict[str, Any]:
    return {
        "compilerOptions": {
            "target": "ES2022",
            "lib": ["ES2023"],
            "module": "ESNext",
            "skipLibCheck": True,
            "moduleResolution": "bundler",
            "allowImportingTsExtensions": True,
            "isolatedModules": True,
            "moduleDetection": "force",
            "noEmit": True,
            "strict": True,
        },
        "include": ["vite.config.ts"],
    }


FRONTEND_GENERATORS: dict[Framework, type[FrontendGenerator]] = {
    Framework.NEXT: NextGenerator,
    Framework.REACT: ReactGenerator,
    Framework.VUE: VueGenerator,
    Framework.ASTRO: AstroGenerator,
}


def get_frontend_generator(
    config: ProjectConfig,
    renderer: TemplateRenderer | None = None,
) -> FrontendGenerator:
    """Return the catalog entry for ``config.framework``.

    Raises:
        UnknownOptionError: If no generator is registered for the framework.
    """
    generator_cls = FRONTEND_GENERATORS.get(config.framework)
    if generator_cls is None:
        raise UnknownOptionError(
            "framework",
            getattr(config.framework, "value", str(config.framework)),
            [f.value for f in FRONTEND_GENERATORS],
        )
    return generator_cls(config, renderer)
