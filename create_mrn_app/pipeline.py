"""create-mrn-app run orchestrator and CLI entry point.

A run goes through these steps in order.  Steps 1-3 (``Pipeline.prepare``)
are synchronous and hold every prompt; steps 4-6 (``Pipeline.execute``) run
under ``asyncio.run``:

1. VALIDATE  -- check supplied flag values against the compatibility tables.
2. RESOLVE   -- fill in missing values (prompts or defaults), apply overrides.
3. TARGET    -- pick the project directory, confirm if it is not empty.
4. GENERATE  -- write the template catalog and manifests for the layout.
5. INSTALL   -- run the package manager, then add the shadcn/ui helpers.
6. GIT       -- initialise a repository and commit (best effort).

Usage::

    create-mrn-app my-app -f react -b elysia -d none -a none -s tailwind -p bun
    create-mrn-app --yes
    python -m create_mrn_app.pipeline . --framework next --yes
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from enum import Enum
from pathlib import Path
from typing import Optional, TypeVar

from pydantic import BaseModel, Field, ValidationError

from . import __version__
from .config import Settings
from .errors import MissingOptionsError, OperationCancelled, ScaffoldError, UnknownOptionError
from .prompts import PromptChooser
from .resolver import (
    ORM,
    Auth,
    BackendFramework,
    Chooser,
    ConfigResolver,
    Database,
    DefaultChooser,
    Framework,
    LayoutDecision,
    Notice,
    PackageManager,
    ProjectConfig,
    Runtime,
    Selection,
    Styling,
    classify,
    frontend_dir,
    label_for,
    validate_selection,
)
from .runner import (
    GitError,
    add_packages,
    check_bun_installed,
    get_run_command,
    init_git,
    install_dependencies,
)
from .scaffolder import ProjectGenerator
from .utils import (
    console,
    create_progress,
    format_duration,
    print_banner,
    print_debug,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    visible_entries,
)

E = TypeVar("E", bound=Enum)


# ---------------------------------------------------------------------------
# Plan and result
# ---------------------------------------------------------------------------


class ScaffoldPlan(BaseModel):
    """A resolved, confirmed run that has not touched the file system yet."""

    config: ProjectConfig
    project_path: Path
    layout: LayoutDecision
    notices: list[Notice] = Field(default_factory=list)
    started: float = Field(description="time.monotonic() when the run began")


class ScaffoldResult(BaseModel):
    """Outcome of a successful run."""

    config: ProjectConfig
    project_path: Path
    layout: LayoutDecision
    files: list[Path] = Field(default_factory=list)
    notices: list[Notice] = Field(default_factory=list)
    installed: bool = Field(default=False, description="Dependencies were installed")
    git_initialized: bool = Field(default=False, description="A repository was created")
    duration: str = ""


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one ``create-mrn-app`` run from raw selections to a ready project.

    Attributes:
        settings: Runtime settings (cwd, skipped steps, timeouts).
        selection: The raw user selections.
        chooser: Source of values the selection leaves unset.
        interactive: Whether the user can be asked to confirm things.
    """

    def __init__(
        self,
        settings: Settings,
        selection: Selection,
        chooser: Optional[Chooser] = None,
        *,
        interactive: bool = False,
    ) -> None:
        self.settings = settings
        self.selection = selection
        self.chooser: Chooser = chooser or DefaultChooser()
        self.interactive = interactive

    async def run(self) -> ScaffoldResult:
        """Prepare and execute in one call."""
        return await self.execute(self.prepare())

    def prepare(self) -> ScaffoldPlan:
        """Steps 1-3.  Every prompt happens here and nothing is written.

        Runs outside the event loop so Ctrl-C at a prompt reaches the
        prompt as ``KeyboardInterrupt``.

        Raises:
            OperationCancelled: The user aborted a prompt or declined to
                write into a non-empty directory.
            ScaffoldError: Invalid selections or a non-empty directory in
                non-interactive mode.
        """
        start = time.monotonic()
        print_banner(__version__)

        # 1. Validate
        validate_selection(self.selection)

        # 2. Resolve
        resolver = ConfigResolver(
            chooser=self.chooser,
            notify=lambda notice: print_info(notice.message),
            cwd=self.settings.cwd,
        )
        config = resolver.resolve(self.selection)
        layout = classify(config.backend)
        print_summary_table(_summarize(config, layout), title="Project configuration")

        # 3. Target directory
        project_path = self._project_path(config)
        self._check_target(project_path)

        return ScaffoldPlan(
            config=config,
            project_path=project_path,
            layout=layout,
            notices=list(resolver.notices),
            started=start,
        )

    async def execute(self, plan: ScaffoldPlan) -> ScaffoldResult:
        """Steps 4-6: write the project, install, initialise git.

        Raises:
            InstallError: The package manager failed.
            OSError: The project tree could not be written.
        """
        config = plan.config
        project_path = plan.project_path

        # 4. Generate
        generator = ProjectGenerator(config)
        with create_progress() as progress:
            progress.add_task("Creating project files...", total=None)
            files = await generator.generate(project_path)
        print_success(f"Created {len(files)} files in {project_path}")

        await self._check_runtime(config)

        # 5. Install
        installed = False
        if self.settings.skip_install:
            print_info("Skipping dependency installation")
        else:
            await self._install(config, project_path, generator.frontend.shadcn_packages())
            installed = True

        # 6. Git
        git_initialized = False
        if not self.settings.skip_git:
            git_initialized = await self._init_git(project_path)

        result = ScaffoldResult(
            config=config,
            project_path=project_path,
            layout=plan.layout,
            files=files,
            notices=plan.notices,
            installed=installed,
            git_initialized=git_initialized,
            duration=format_duration(time.monotonic() - plan.started),
        )
        self._print_next_steps(result)
        return result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _project_path(self, config: ProjectConfig) -> Path:
        cwd = Path(self.settings.cwd)
        if config.in_current_dir:
            return cwd
        return cwd / config.project_name

    def _check_target(self, project_path: Path) -> None:
        """Guard against writing into a directory that already has content."""
        if self.settings.force or not visible_entries(project_path):
            return
        if not self.interactive:
            raise ScaffoldError(
                f"Directory {project_path} is not empty (use --force to write into it)"
            )
        if not self.chooser.ask_confirm(
            "overwrite",
            f"Directory {project_path.name} is not empty. Continue anyway?",
            False,
        ):
            raise OperationCancelled()

    async def _check_runtime(self, config: ProjectConfig) -> None:
        needs_bun = (
            config.package_manager is PackageManager.BUN or config.runtime is Runtime.BUN
        )
        if needs_bun and not await check_bun_installed():
            print_warning(
                "Bun is required for this project but was not found. "
                "Install it from https://bun.sh before running the project."
            )

    async def _install(
        self, config: ProjectConfig, project_path: Path, shadcn_packages: list[str]
    ) -> None:
        pm = config.package_manager
        timeout = self.settings.install_timeout
        with create_progress() as progress:
            progress.add_task(f"Installing dependencies with {pm.value}...", total=None)
            await install_dependencies(project_path, pm, timeout=timeout)
            if shadcn_packages:
                progress.add_task("Adding shadcn/ui packages...", total=None)
                frontend_path = project_path / frontend_dir(classify(config.backend))
                await add_packages(frontend_path, pm, shadcn_packages, timeout=timeout)
        print_success("Dependencies installed")

    async def _init_git(self, project_path: Path) -> bool:
        try:
            created = await init_git(
                project_path,
                message=self.settings.commit_message,
                timeout=self.settings.git_timeout,
            )
        except (GitError, OSError) as exc:
            # Git is optional; the project is usable without a repository.
            if self.settings.verbose:
                print_debug(f"Git initialization skipped: {exc}")
            return False
        if created:
            print_success("Initialized a git repository")
        return created

    def _print_next_steps(self, result: ScaffoldResult) -> None:
        config = result.config
        pm = config.package_manager
        steps: list[str] = []
        if not config.in_current_dir:
            steps.append(f"cd {config.project_name}")
        if not result.installed:
            steps.append(f"{pm.value} install")
        if config.orm is not ORM.NONE:
            steps.append(get_run_command(pm, "db:push"))
        steps.append(get_run_command(pm, "dev"))

        console.print()
        print_success(f"Success! Created {config.project_name} in {result.duration}")
        console.print()
        console.print("Next steps:")
        for step in steps:
            console.print(f"  [cyan]{step}[/cyan]")
        console.print()


def _summarize(config: ProjectConfig, layout: LayoutDecision) -> dict[str, str]:
    extras = config.extras
    enabled = [
        name
        for name, on in (
            ("TypeScript", extras.typescript),
            ("ESLint", extras.eslint),
            ("Prettier", extras.prettier),
            ("Vitest", extras.testing),
            ("Playwright", extras.playwright),
            ("Docker", extras.docker),
        )
        if on
    ]
    summary = {
        "Project": config.project_name,
        "Framework": label_for(config.framework)[0],
        "Backend": label_for(config.backend)[0],
    }
    if config.runtime is not None:
        summary["Runtime"] = label_for(config.runtime)[0]
    summary.update(
        {
            "Database": label_for(config.database)[0],
            "ORM": config.orm.value,
            "Auth": label_for(config.auth)[0],
            "Styling": label_for(config.styling)[0],
            "Package manager": config.package_manager.value,
            "Layout": layout.value,
            "Extras": ", ".join(enabled) or "none",
        }
    )
    return summary


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

# (flag shown to the user, argparse dest) that --non-interactive requires.
_REQUIRED_FLAGS: tuple[tuple[str, str], ...] = (
    ("project name", "project_name"),
    ("--framework", "framework"),
    ("--backend", "backend"),
    ("--db", "database"),
    ("--auth", "auth"),
    ("--styling", "styling"),
    ("--pm", "package_manager"),
)

# argparse dest -> (option name in error messages, enum)
_ENUM_OPTIONS: dict[str, tuple[str, type[Enum]]] = {
    "framework": ("framework", Framework),
    "backend": ("backend", BackendFramework),
    "database": ("database", Database),
    "orm": ("orm", ORM),
    "runtime": ("runtime", Runtime),
    "auth": ("auth", Auth),
    "styling": ("styling", Styling),
    "package_manager": ("package manager", PackageManager),
}


def parse_enum(option: str, enum_cls: type[E], value: str) -> E:
    """Convert a flag value to *enum_cls*, raising ``UnknownOptionError``."""
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        raise UnknownOptionError(option, value, [m.value for m in enum_cls]) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-mrn-app",
        description="Scaffold a modern full-stack JavaScript/TypeScript application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-mrn-app my-app\n"
            "  create-mrn-app my-app -f react -b elysia -d none -a none -s tailwind -p bun\n"
            "  create-mrn-app . --framework next --yes\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Project directory name, or '.' for the current directory",
    )
    parser.add_argument("-f", "--framework", help="next | react | vue | astro")
    parser.add_argument(
        "-b", "--backend",
        help="none | nextjs-builtin | express | fastify | nestjs | hono | elysia | convex",
    )
    parser.add_argument(
        "-d", "--db", dest="database",
        help="supabase | convex | neon | sqlite | turso | planetscale | mongodb | none",
    )
    parser.add_argument("--orm", help="prisma | drizzle | none")
    parser.add_argument("--runtime", help="node | bun (hono only)")
    parser.add_argument(
        "-a", "--auth", help="next-auth | clerk | supabase-auth | better-auth | none"
    )
    parser.add_argument(
        "-s", "--styling", help="tailwind | tailwind-shadcn | css-modules | vanilla"
    )
    parser.add_argument("-p", "--pm", dest="package_manager", help="npm | pnpm | bun")

    parser.add_argument(
        "--typescript", action=argparse.BooleanOptionalAction, default=None,
        help="Use TypeScript (default: yes)",
    )
    parser.add_argument(
        "--eslint", action=argparse.BooleanOptionalAction, default=None,
        help="Add ESLint and Prettier (default: yes)",
    )
    parser.add_argument("--docker", action="store_true", default=None, help="Add Docker support")
    parser.add_argument("--testing", action="store_true", default=None, help="Add Vitest")
    parser.add_argument(
        "--playwright", action="store_true", default=None, help="Add Playwright e2e tests"
    )

    parser.add_argument(
        "-y", "--yes", action="store_true", help="Skip prompts and use defaults"
    )
    parser.add_argument(
        "--non-interactive", action="store_true",
        help="Never prompt; all required options must be given as flags",
    )
    parser.add_argument(
        "--force", action="store_true", default=None,
        help="Write into a non-empty directory without asking",
    )
    parser.add_argument(
        "--skip-install", action="store_true", default=None, help="Do not install dependencies"
    )
    parser.add_argument(
        "--skip-git", action="store_true", default=None, help="Do not initialize git"
    )
    parser.add_argument(
        "--verbose", action="store_true", default=None, help="Print debug output"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def selection_from_args(args: argparse.Namespace) -> Selection:
    """Build a ``Selection`` from parsed flags.

    Raises:
        UnknownOptionError: A flag value is not a recognised option.
    """
    values: dict[str, object] = {"project_name": args.project_name}
    for dest, (option, enum_cls) in _ENUM_OPTIONS.items():
        raw = getattr(args, dest)
        values[dest] = parse_enum(option, enum_cls, raw) if raw is not None else None
    for extra in ("typescript", "eslint", "testing", "playwright", "docker"):
        values[extra] = getattr(args, extra)
    return Selection(**values)


def choose_mode(args: argparse.Namespace) -> tuple[Chooser, bool]:
    """Return the chooser for this run and whether it is interactive.

    Raises:
        MissingOptionsError: ``--non-interactive`` without every required flag.
    """
    if args.yes:
        return DefaultChooser(), False
    missing = [flag for flag, dest in _REQUIRED_FLAGS if getattr(args, dest) is None]
    if not missing:
        return DefaultChooser(), False
    if args.non_interactive:
        raise MissingOptionsError(missing)
    return PromptChooser(), True


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.  Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env(
            force=args.force,
            skip_install=args.skip_install,
            skip_git=args.skip_git,
            verbose=args.verbose,
        )
    except (ValueError, ValidationError) as exc:
        print_error(f"Error: invalid environment settings: {exc}")
        return 1

    try:
        selection = selection_from_args(args)
        chooser, interactive = choose_mode(args)
        pipeline = Pipeline(settings, selection, chooser, interactive=interactive)
        # Prompts run before the event loop exists; asyncio.run replaces the
        # SIGINT handler for the duration of the loop.
        plan = pipeline.prepare()
        asyncio.run(pipeline.execute(plan))
    except OperationCancelled as exc:
        print_warning(str(exc))
        return 0
    except KeyboardInterrupt:
        print_warning(str(OperationCancelled()))
        return 0
    except (ScaffoldError, OSError) as exc:
        print_error(f"Error: {exc}")
        if settings.verbose:
            console.print_exception()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
