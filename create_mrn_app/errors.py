"""Exception types shared across the resolver, scaffolder and pipeline."""

from __future__ import annotations


class OperationCancelled(Exception):
    """Raised when the user aborts a prompt or declines to continue.

    Deliberately not a ``ScaffoldError``: the CLI treats it as a clean exit.
    """

    def __init__(self, message: str = "Operation cancelled") -> None:
        super().__init__(message)


class ScaffoldError(Exception):
    """Base class for every fatal error raised while creating a project."""


class UnknownOptionError(ScaffoldError):
    """Raised when an option value is not a recognised enum member."""

    def __init__(self, option: str, value: str, choices: list[str] | None = None) -> None:
        self.option = option
        self.value = value
        self.choices = choices or []
        message = f"Unknown {option}: {value}"
        if self.choices:
            message += f" (expected one of: {', '.join(self.choices)})"
        super().__init__(message)


class IncompatibleSelectionError(ScaffoldError):
    """Raised when supplied options violate the compatibility tables."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Incompatible options:\n" + "\n".join(f"  - {p}" for p in problems))


class MissingOptionsError(ScaffoldError):
    """Raised in non-interactive mode when required flags are missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Non-interactive mode requires: " + ", ".join(missing)
        )
