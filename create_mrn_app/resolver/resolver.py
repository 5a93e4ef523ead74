"""Configuration resolution.

Turns a raw ``Selection`` into a single immutable ``ProjectConfig``.  Missing
values are obtained from a ``Chooser`` (interactive prompts or plain defaults)
in a fixed order, because later allow-lists depend on earlier answers:

1. project name            7. database, then ORM
2. framework               8. auth
3. backend                 9. styling
4. forced package manager  10. package manager
5. runtime                 11. extras
6. database skip

Any field whose filtered option list has a single entry is assigned without
asking.  Overrides and auto-selections are reported as ``Notice`` objects.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional, Protocol, TypeVar

from .compat import DEFAULT_TABLES, CompatibilityTables
from .models import (
    CURRENT_DIR_MARKER,
    ORM,
    Auth,
    BackendFramework,
    Database,
    Extras,
    Framework,
    Notice,
    NoticeKind,
    PackageManager,
    ProjectConfig,
    Runtime,
    Selection,
    Styling,
)
from .validation import validate_project_name

E = TypeVar("E")

DEFAULT_PROJECT_NAME = "my-app"

# (field, prompt message, default) for each boolean extra, in prompt order.
_EXTRAS: tuple[tuple[str, str, bool], ...] = (
    ("typescript", "Use TypeScript?", True),
    ("eslint", "Add ESLint + Prettier?", True),
    ("testing", "Add a testing setup (Vitest)?", False),
    ("playwright", "Add Playwright end-to-end tests?", False),
    ("docker", "Add Docker support?", False),
)


# ---------------------------------------------------------------------------
# Choosers
# ---------------------------------------------------------------------------

class Chooser(Protocol):
    """Supplies values the user did not pass on the command line."""

    def ask_text(
        self,
        key: str,
        message: str,
        default: str,
        validate: Optional[Callable[[str], Optional[str]]] = None,
    ) -> str: ...

    def ask_select(self, key: str, message: str, options: Sequence[E], default: E) -> E: ...

    def ask_confirm(self, key: str, message: str, default: bool) -> bool: ...


class DefaultChooser:
    """Answers every question with its default.  Never prompts."""

    def ask_text(self, key, message, default, validate=None):
        return default

    def ask_select(self, key, message, options, default):
        return default

    def ask_confirm(self, key, message, default):
        return default


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class ConfigResolver:
    """Resolves selections against a set of compatibility tables.

    Attributes:
        tables: The allow-lists and backend descriptors to honour.
        chooser: Source of values for unset fields.
        notices: Every notice emitted by the most recent ``resolve`` call.
    """

    def __init__(
        self,
        tables: CompatibilityTables = DEFAULT_TABLES,
        *,
        chooser: Optional[Chooser] = None,
        notify: Optional[Callable[[Notice], None]] = None,
        cwd: str | Path | None = None,
    ) -> None:
        self.tables = tables
        self.chooser: Chooser = chooser or DefaultChooser()
        self._notify = notify
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.notices: list[Notice] = []

    def resolve(self, selection: Selection) -> ProjectConfig:
        """Produce the resolved configuration for *selection*."""
        self.notices = []
        tables = self.tables

        project_name, in_current_dir = self._resolve_project_name(selection)

        framework = self._pick(
            "framework", selection.framework, tables.frameworks, Framework.NEXT,
            "Which framework would you like to use?",
        )

        backend = self._pick(
            "backend", selection.backend, tables.backends_for(framework),
            BackendFramework.NONE, "Which backend would you like to use?",
        )
        descriptor = tables.descriptor(backend)

        forced_pm: Optional[PackageManager] = None
        if descriptor.mandates_package_manager:
            forced_pm = descriptor.package_manager
            self._force_package_manager(
                forced_pm,
                f"{descriptor.label} ({backend.value}) requires {forced_pm.value}",
            )

        runtime: Optional[Runtime] = None
        if descriptor.runtime_selectable:
            runtime = self._pick(
                "runtime", selection.runtime, tuple(tables.runtimes), Runtime.NODE,
                f"Which runtime should {descriptor.label} use?",
            )
            implied = tables.runtimes[runtime].package_manager
            if implied is not None:
                forced_pm = implied
                self._force_package_manager(
                    implied,
                    f"{descriptor.label} ({backend.value}) on the {runtime.value} "
                    f"runtime requires {implied.value}",
                )

        if descriptor.skips_database:
            database, orm = Database.NONE, ORM.NONE
            if selection.database not in (None, Database.NONE):
                self._emit(
                    NoticeKind.DATABASE_SKIPPED,
                    f"{descriptor.label} does not use a separate database; "
                    f"ignoring {selection.database.value}.",
                )
        else:
            database = self._pick(
                "database", selection.database, tables.databases_for(framework),
                Database.NONE, "Which database would you like to use?",
            )
            orm = self._resolve_orm(selection, database)

        auth = self._pick(
            "auth", selection.auth, tables.auths_for(framework), Auth.NONE,
            "Which authentication would you like to use?",
        )

        styling = self._pick(
            "styling", selection.styling, tables.stylings, Styling.TAILWIND,
            "Which styling solution would you like to use?",
        )

        if forced_pm is not None:
            package_manager = forced_pm
        else:
            package_manager = self._pick(
                "package_manager", selection.package_manager, tables.package_managers,
                PackageManager.PNPM, "Which package manager would you like to use?",
            )

        extras = self._resolve_extras(selection)

        return ProjectConfig(
            project_name=project_name,
            in_current_dir=in_current_dir,
            framework=framework,
            backend=backend,
            database=database,
            orm=orm,
            auth=auth,
            styling=styling,
            package_manager=package_manager,
            runtime=runtime,
            extras=extras,
        )

    # -- Steps -------------------------------------------------------------

    def _resolve_project_name(self, selection: Selection) -> tuple[str, bool]:
        name = selection.project_name
        if name is None:
            name = self.chooser.ask_text(
                "project_name",
                "What is your project name? (. for the current directory)",
                DEFAULT_PROJECT_NAME,
                validate_project_name,
            )
        if name == CURRENT_DIR_MARKER:
            return self.cwd.resolve().name, True
        return name, False

    def _resolve_orm(self, selection: Selection, database: Database) -> ORM:
        if database is Database.NONE:
            return ORM.NONE

        options = self.tables.orms_for(database)
        if selection.orm in options:
            return selection.orm

        candidates = [o for o in options if o is not ORM.NONE]
        if len(candidates) == 1:
            orm = candidates[0]
            self._emit(
                NoticeKind.ORM_AUTO_SELECTED,
                f"Using {orm.value} as the ORM ({database.value} supports no other).",
            )
            return orm

        return self._pick(
            "orm", None, options, options[0], "Which ORM would you like to use?",
        )

    def _resolve_extras(self, selection: Selection) -> Extras:
        values: dict[str, bool] = {}
        for field, message, default in _EXTRAS:
            supplied = getattr(selection, field)
            if supplied is None:
                supplied = self.chooser.ask_confirm(field, message, default)
            values[field] = supplied
        return Extras(**values)

    def _force_package_manager(self, package_manager: PackageManager, reason: str) -> None:
        self._emit(
            NoticeKind.PACKAGE_MANAGER_FORCED,
            f"{reason}; package manager set to {package_manager.value}.",
        )

    # -- Helpers -----------------------------------------------------------

    def _pick(
        self,
        key: str,
        supplied: Optional[E],
        options: Sequence[E],
        default: E,
        message: str,
    ) -> E:
        """Return *supplied* if allowed, the only option, or the chooser's answer."""
        if supplied is not None and supplied in options:
            return supplied
        if len(options) == 1:
            return options[0]
        if default not in options:
            default = options[0]
        return self.chooser.ask_select(key, message, options, default)

    def _emit(self, kind: NoticeKind, message: str) -> None:
        notice = Notice(kind=kind, message=message)
        self.notices.append(notice)
        if self._notify is not None:
            self._notify(notice)


def resolve(
    selection: Selection,
    tables: CompatibilityTables = DEFAULT_TABLES,
    *,
    chooser: Optional[Chooser] = None,
    notify: Optional[Callable[[Notice], None]] = None,
    cwd: str | Path | None = None,
) -> ProjectConfig:
    """Resolve *selection* into a ``ProjectConfig`` (see ``ConfigResolver``)."""
    resolver = ConfigResolver(tables, chooser=chooser, notify=notify, cwd=cwd)
    return resolver.resolve(selection)
