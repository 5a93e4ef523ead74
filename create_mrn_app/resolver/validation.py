"""Up-front validation of user-supplied selections.

Prompts only ever offer options from the current allow-list, but values passed
as CLI flags skip that filtering.  ``validate_selection`` checks every supplied
value against the same allow-lists the resolver uses, so a complete flag set
cannot reach the resolver in an inconsistent state.
"""

from __future__ import annotations

import re

from ..errors import IncompatibleSelectionError
from .compat import DEFAULT_TABLES, CompatibilityTables
from .models import CURRENT_DIR_MARKER, ORM, Database, Selection

_PROJECT_NAME_RE = re.compile(r"^[a-z0-9_-]+$", re.IGNORECASE)


def validate_project_name(value: str) -> str | None:
    """Return an error message for an invalid project name, else ``None``."""
    if not value:
        return "Project name is required"
    if value == CURRENT_DIR_MARKER:
        return None
    if not _PROJECT_NAME_RE.match(value):
        return "Project name can only contain letters, numbers, hyphens, and underscores"
    return None


def find_problems(
    selection: Selection,
    tables: CompatibilityTables = DEFAULT_TABLES,
) -> list[str]:
    """List every way *selection* violates the compatibility tables.

    Only values the user actually supplied are checked; anything left unset is
    filled in later by the resolver from the filtered allow-lists.
    """
    problems: list[str] = []

    if selection.project_name is not None:
        error = validate_project_name(selection.project_name)
        if error:
            problems.append(f"{error}: {selection.project_name!r}")

    framework = selection.framework
    backend = selection.backend
    database = selection.database

    if framework is not None:
        if backend is not None and backend not in tables.backends_for(framework):
            problems.append(
                f"Backend {backend.value!r} is not available for {framework.value!r}"
            )
        if database is not None and database not in tables.databases_for(framework):
            problems.append(
                f"Database {database.value!r} is not available for {framework.value!r}"
            )
        if selection.auth is not None and selection.auth not in tables.auths_for(framework):
            problems.append(
                f"Auth {selection.auth.value!r} is not available for {framework.value!r}"
            )

    skips_database = backend is not None and tables.descriptor(backend).skips_database
    if database is not None and selection.orm is not None and not skips_database:
        if database is Database.NONE:
            if selection.orm is not ORM.NONE:
                problems.append(f"ORM {selection.orm.value!r} requires a database")
        elif selection.orm not in tables.orms_for(database):
            problems.append(
                f"ORM {selection.orm.value!r} is not available for {database.value!r}"
            )

    return problems


def validate_selection(
    selection: Selection,
    tables: CompatibilityTables = DEFAULT_TABLES,
) -> None:
    """Raise ``IncompatibleSelectionError`` if *selection* is inconsistent."""
    problems = find_problems(selection, tables)
    if problems:
        raise IncompatibleSelectionError(problems)
