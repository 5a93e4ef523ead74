"""Backend entries of the template catalog.

Separate backends (``express``, ``fastify``, ``nestjs``, ``hono``, ``elysia``)
derive from ``ServerBackendGenerator`` and produce a complete package of
their own.  Integrated backends (``nextjs-builtin``, ``convex``) only add
source files, scripts and dependencies to the frontend package.
"""

from __future__ import annotations

from typing import Any, ClassVar

from ..errors import UnknownOptionError
from ..resolver.models import BackendFramework, ProjectConfig, Runtime
from .catalog import (
    PRETTIER_CONFIG,
    CatalogGenerator,
    orm_dependencies,
    orm_dev_dependencies,
    orm_scripts,
    orm_templates,
)
from .templates import TemplateRenderer

BACKEND_PORT = 4000


class BackendGenerator(CatalogGenerator):
    """Common base of every backend catalog entry."""

    backend: ClassVar[BackendFramework]
    db_dir: ClassVar[str] = "src/db"

    @property
    def ext(self) -> str:
        return "ts"

    def extra_context(self) -> dict[str, Any]:
        runtime = self.config.runtime
        return {
            "backend_port": BACKEND_PORT,
            "db_dir": self.db_dir,
            "runtime": runtime.value if runtime is not None else "",
            "is_bun": self.is_bun,
        }

    @property
    def is_bun(self) -> bool:
        return self.backend is BackendFramework.ELYSIA or self.config.runtime is Runtime.BUN


# ---------------------------------------------------------------------------
# Separate backends
# ---------------------------------------------------------------------------


class ServerBackendGenerator(BackendGenerator):
    """A backend that lives in its own package (``packages/backend``)."""

    def _framework_scripts(self) -> dict[str, str]:
        return {}

    def _framework_dependencies(self) -> dict[str, str]:
        return {}

    def _framework_dev_dependencies(self) -> dict[str, str]:
        return {}

    def _framework_templates(self) -> list[tuple[str, str]]:
        return []

    def _common_dependencies(self) -> dict[str, str]:
        return {"zod": "^3.23.0", "dotenv": "^16.4.0"}

    def _common_dev_dependencies(self) -> dict[str, str]:
        return {"typescript": "^5.6.0", "@types/node": "^22.10.0", "tsx": "^4.19.0"}

    def scripts(self) -> dict[str, str]:
        scripts = self._framework_scripts()
        if self.config.extras.eslint and "lint" not in scripts:
            scripts["lint"] = "eslint src"
        scripts.update(orm_scripts(self.config))
        return scripts

    def dependencies(self) -> dict[str, str]:
        return {
            **self._framework_dependencies(),
            **self._common_dependencies(),
            **orm_dependencies(self.config),
        }

    def dev_dependencies(self) -> dict[str, str]:
        dev = {**self._framework_dev_dependencies(), **self._common_dev_dependencies()}
        if self.config.extras.eslint:
            dev.setdefault("eslint", "^9.17.0")
            dev.setdefault("prettier", "^3.4.0")
        dev.update(orm_dev_dependencies(self.config))
        return dev

    def templates(self) -> list[tuple[str, str]]:
        files = [
            ("backend/shared/gitignore.j2", ".gitignore"),
            ("backend/shared/env.j2", ".env.example"),
            ("backend/shared/errors.j2", "src/utils/errors.ts"),
        ]
        files += self._framework_templates()
        files += orm_templates(self.config, self.db_dir)
        if self.config.extras.docker:
            files.append(("backend/shared/Dockerfile.j2", "Dockerfile"))
        return files

    def json_files(self) -> dict[str, dict[str, Any]]:
        files = {"tsconfig.json": self._tsconfig()}
        if self.config.extras.prettier:
            files[".prettierrc"] = dict(PRETTIER_CONFIG)
        return files

    def _tsconfig(self) -> dict[str, Any]:
        return {
            "compilerOptions": {
                "target": "ES2022",
                "module": "ESNext",
                "moduleResolution": "bundler",
                "lib": ["ES2022"],
                "outDir": "./dist",
                "rootDir": "./src",
                "strict": True,
                "esModuleInterop": True,
                "skipLibCheck": True,
                "forceConsistentCasingInFileNames": True,
                "resolveJsonModule": True,
                "declaration": True,
                "declarationMap": True,
                "sourceMap": True,
                "paths": {"@/*": ["./src/*"]},
            },
            "include": ["src/**/*"],
            "exclude": ["node_modules", "dist"],
        }


class ExpressGenerator(ServerBackendGenerator):
    key = "express"
    label = "Express"
    backend = BackendFramework.EXPRESS

    def _framework_scripts(self) -> dict[str, str]:
        return {
            "dev": "tsx watch src/index.ts",
            "build": "tsc",
            "start": "node dist/index.js",
        }

    def _framework_dependencies(self) -> dict[str, str]:
        return {
            "express": "^4.21.0",
            "cors": "^2.8.5",
            "helmet": "^8.0.0",
            "pino": "^9.5.0",
            "pino-http": "^10.3.0",
        }

    def _framework_dev_dependencies(self) -> dict[str, str]:
        return {
            "@types/express": "^5.0.0",
            "@types/cors": "^2.8.17",
            "pino-pretty": "^13.0.0",
        }

    def _framework_templates(self) -> list[tuple[str, str]]:
        return [
            ("backend/express/index.j2", "src/index.ts"),
            ("backend/express/app.j2", "src/app.ts"),
            ("backend/express/routes.j2", "src/routes/index.ts"),
            ("backend/express/health.j2", "src/routes/health.ts"),
            ("backend/express/error-middleware.j2", "src/middleware/error.ts"),
            ("backend/shared/logger.j2", "src/utils/logger.ts"),
            ("backend/shared/schemas.j2", "src/schemas/index.ts"),
        ]


class FastifyGenerator(ServerBackendGenerator):
    key = "fastify"
    label = "Fastify"
    backend = BackendFramework.FASTIFY

    def _framework_scripts(self) -> dict[str, str]:
        return {
            "dev": "tsx watch src/index.ts",
            "build": "tsc",
            "start": "node dist/index.js",
        }

    def _framework_dependencies(self) -> dict[str, str]:
        return {
            "fastify": "^5.1.0",
            "@fastify/cors": "^10.0.0",
            "@fastify/helmet": "^12.0.0",
        }

    def _framework_dev_dependencies(self) -> dict[str, str]:
        return {"pino-pretty": "^13.0.0"}

    def _framework_templates(self) -> list[tuple[str, str]]:
        return [
            ("backend/fastify/index.j2", "src/index.ts"),
            ("backend/fastify/app.j2", "src/app.ts"),
            ("backend/fastify/health.j2", "src/routes/health.ts"),
            ("backend/shared/schemas.j2", "src/schemas/index.ts"),
        ]


class NestGenerator(ServerBackendGenerator):
    key = "nestjs"
    label = "NestJS"
    backend = BackendFramework.NESTJS
    module_type = False

    def _framework_scripts(self) -> dict[str, str]:
        return {
            "prebuild": "rimraf dist",
            "build": "nest build",
            "format": 'prettier --write "src/**/*.ts" "test/**/*.ts"',
            "start": "nest start",
            "start:dev": "nest start --watch",
            "start:debug": "nest start --debug --watch",
            "start:prod": "node dist/main",
            "dev": "nest start --watch",
            "lint": 'eslint "{src,apps,libs,test}/**/*.ts" --fix',
            "test": "jest",
            "test:watch": "jest --watch",
            "test:cov": "jest --coverage",
        }

    def _framework_dependencies(self) -> dict[str, str]:
        return {
            "@nestjs/common": "^10.4.0",
            "@nestjs/core": "^10.4.0",
            "@nestjs/platform-express": "^10.4.0",
            "@nestjs/config": "^3.3.0",
            "class-transformer": "^0.5.1",
            "class-validator": "^0.14.1",
            "reflect-metadata": "^0.2.0",
            "rxjs": "^7.8.0",
        }

    def _framework_dev_dependencies(self) -> dict[str, str]:
        return {
            "@nestjs/cli": "^10.4.0",
            "@nestjs/schematics": "^10.2.0",
            "@nestjs/testing": "^10.4.0",
            "@types/express": "^5.0.0",
            "@types/jest": "^29.5.0",
            "@types/supertest": "^6.0.0",
            "eslint": "^9.0.0",
            "jest": "^29.7.0",
            "prettier": "^3.4.0",
            "rimraf": "^6.0.0",
            "source-map-support": "^0.5.21",
            "supertest": "^7.0.0",
            "ts-jest": "^29.2.0",
            "ts-loader": "^9.5.0",
            "ts-node": "^10.9.0",
            "tsconfig-paths": "^4.2.0",
        }

    def _framework_templates(self) -> list[tuple[str, str]]:
        return [
            ("backend/nestjs/main.j2", "src/main.ts"),
            ("backend/nestjs/app.module.j2", "src/app.module.ts"),
            ("backend/nestjs/app.controller.j2", "src/app.controller.ts"),
            ("backend/nestjs/app.service.j2", "src/app.service.ts"),
            ("backend/nestjs/health.module.j2", "src/modules/health/health.module.ts"),
            ("backend/nestjs/health.controller.j2", "src/modules/health/health.controller.ts"),
            ("backend/nestjs/http-exception.filter.j2", "src/common/filters/http-exception.filter.ts"),
        ]

    def json_files(self) -> dict[str, dict[str, Any]]:
        files = super().json_files()
        files["tsconfig.build.json"] = {
            "extends": "./tsconfig.json",
            "exclude": ["node_modules", "test", "dist", "**/*spec.ts"],
        }
        files["nest-cli.json"] = {
            "$schema": "https://json.schemastore.org/nest-cli",
            "collection": "@nestjs/schematics",
            "sourceRoot": "src",
            "compilerOptions": {"deleteOutDir": True},
        }
        return files

    def _tsconfig(self) -> dict[str, Any]:
        return {
            "compilerOptions": {
                "module": "commonjs",
                "declaration": True,
                "removeComments": True,
                "emitDecoratorMetadata": True,
                "experimentalDecorators": True,
                "allowSyntheticDefaultImports": True,
                "target": "ES2021",
                "sourceMap": True,
                "outDir": "./dist",
                "baseUrl": "./",
                "incremental": True,
                "skipLibCheck": True,
                "strictNullChecks": True,
                "noImplicitAny": True,
                "paths": {"@/*": ["src/*"]},
            }
        }


class HonoGenerator(ServerBackendGenerator):
    key = "hono"
    label = "Hono"
    backend = BackendFramework.HONO

    def _framework_scripts(self) -> dict[str, str]:
        if self.is_bun:
            return {
                "dev": "bun run --hot src/index.ts",
                "build": "bun build src/index.ts --outdir dist --target bun",
                "start": "bun run dist/index.js",
            }
        return {
            "dev": "tsx watch src/index.ts",
            "build": "tsc",
            "start": "node dist/index.js",
        }

    def _framework_dependencies(self) -> dict[str, str]:
        deps = {"hono": "^4.6.0", "@hono/zod-validator": "^0.4.0"}
        if not self.is_bun:
            deps["@hono/node-server"] = "^1.13.0"
            deps["pino"] = "^9.5.0"
        return deps

    def _framework_dev_dependencies(self) -> dict[str, str]:
        if self.is_bun:
            return {"@types/bun": "latest"}
        return {"pino-pretty": "^13.0.0"}

    def _common_dev_dependencies(self) -> dict[str, str]:
        common = super()._common_dev_dependencies()
        if self.is_bun:
            common.pop("tsx")
        return common

    def _framework_templates(self) -> list[tuple[str, str]]:
        files = [
            ("backend/hono/index.j2", "src/index.ts"),
            ("backend/hono/health.j2", "src/routes/health.ts"),
            ("backend/hono/error-middleware.j2", "src/middleware/error.ts"),
            ("backend/shared/schemas.j2", "src/schemas/index.ts"),
        ]
        if not self.is_bun:
            files.append(("backend/shared/logger.j2", "src/utils/logger.ts"))
        return files


class ElysiaGenerator(ServerBackendGenerator):
    key = "elysia"
    label = "Elysia"
    backend = BackendFramework.ELYSIA

    def _framework_scripts(self) -> dict[str, str]:
        return {
            "dev": "bun run --hot src/index.ts",
            "build": "bun build src/index.ts --outdir dist --target bun",
            "start": "bun run dist/index.js",
            "test": "bun test",
        }

    def _framework_dependencies(self) -> dict[str, str]:
        return {"elysia": "^1.2.0", "@elysiajs/cors": "^1.1.0"}

    def _common_dependencies(self) -> dict[str, str]:
        # Bun loads .env files natively
        return {}

    def _common_dev_dependencies(self) -> dict[str, str]:
        return {"bun-types": "latest", "typescript": "^5.6.0"}

    def _framework_templates(self) -> list[tuple[str, str]]:
        return [
            ("backend/elysia/index.j2", "src/index.ts"),
            ("backend/elysia/health.j2", "src/routes/health.ts"),
        ]

    def _tsconfig(self) -> dict[str, Any]:
        tsconfig = super()._tsconfig()
        tsconfig["compilerOptions"]["types"] = ["bun-types"]
        return tsconfig


# ---------------------------------------------------------------------------
# Integrated backends
# ---------------------------------------------------------------------------


class NextjsBuiltinGenerator(BackendGenerator):
    """Next.js route handlers written into the frontend package."""

    key = "nextjs-builtin"
    label = "Next.js API Routes"
    backend = BackendFramework.NEXTJS_BUILTIN
    db_dir = "lib/db"

    def scripts(self) -> dict[str, str]:
        return orm_scripts(self.config)

    def dependencies(self) -> dict[str, str]:
        return {"zod": "^3.23.0", **orm_dependencies(self.config)}

    def dev_dependencies(self) -> dict[str, str]:
        return orm_dev_dependencies(self.config)

    def templates(self) -> list[tuple[str, str]]:
        files = [
            ("backend/nextjs/health.j2", "app/api/health/route.ts"),
            ("backend/nextjs/collection-route.j2", "app/api/users/route.ts"),
            ("backend/nextjs/item-route.j2", "app/api/users/[id]/route.ts"),
            ("backend/nextjs/collection-route.j2", "app/api/items/route.ts"),
            ("backend/nextjs/item-route.j2", "app/api/items/[id]/route.ts"),
            ("backend/nextjs/errors.j2", "lib/api/errors.ts"),
            ("backend/nextjs/response.j2", "lib/api/response.ts"),
            ("backend/shared/schemas.j2", "lib/validations/index.ts"),
        ]
        files += orm_templates(self.config, self.db_dir)
        return files

    def file_context(self, output: str, context: dict[str, Any]) -> dict[str, Any]:
        # users and items share the route templates
        if output.startswith("app/api/items"):
            return {**context, "resource": "items", "model": "item"}
        if output.startswith("app/api/users"):
            return {**context, "resource": "users", "model": "user"}
        return context


class ConvexGenerator(BackendGenerator):
    """Convex functions and schema written into the frontend package."""

    key = "convex"
    label = "Convex"
    backend = BackendFramework.CONVEX

    def scripts(self) -> dict[str, str]:
        return {
            "convex:dev": "convex dev",
            "convex:deploy": "convex deploy",
            "convex:codegen": "convex codegen",
        }

    def dependencies(self) -> dict[str, str]:
        return {"convex": "^1.17.0"}

    def templates(self) -> list[tuple[str, str]]:
        return [
            ("backend/convex/schema.j2", "convex/schema.ts"),
            ("backend/convex/users.j2", "convex/users.ts"),
            ("backend/convex/items.j2", "convex/items.ts"),
        ]

    def json_files(self) -> dict[str, dict[str, Any]]:
        return {"convex.json": {"functions": "convex/"}}


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

BACKEND_GENERATORS: dict[BackendFramework, type[BackendGenerator]] = {
    BackendFramework.EXPRESS: ExpressGenerator,
    BackendFramework.FASTIFY: FastifyGenerator,
    BackendFramework.NESTJS: NestGenerator,
    BackendFramework.HONO: HonoGenerator,
    BackendFramework.ELYSIA: ElysiaGenerator,
    BackendFramework.NEXTJS_BUILTIN: NextjsBuiltinGenerator,
    BackendFramework.CONVEX: ConvexGenerator,
}


def get_backend_generator(
    config: ProjectConfig,
    renderer: TemplateRenderer | None = None,
) -> BackendGenerator:
    """Return the catalog entry for ``config.backend``.

    ``none`` has no catalog entry; callers only dispatch when a backend exists.

    Raises:
        UnknownOptionError: If no generator is registered for the backend.
    """
    generator_cls = BACKEND_GENERATORS.get(config.backend)
    if generator_cls is None:
        raise UnknownOptionError(
            "backend",
            getattr(config.backend, "value", str(config.backend)),
            [b.value for b in BACKEND_GENERATORS],
        )
    return generator_cls(config, renderer)
