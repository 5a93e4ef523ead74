"""create-mrn-app runtime settings.

Typed knobs that control how a run behaves (where it runs, which external
steps it skips, subprocess timeouts).  Settings use a Pydantic v2 model so
they are validated at construction time and can be read from environment
variables without boiler-plate.  They say nothing about *what* project is
generated -- that is the resolver's ``ProjectConfig``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_COMMIT_MESSAGE = "Initial commit from create-mrn-app"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Global settings for a single ``create-mrn-app`` run.

    Instances are typically created once by the CLI entry point (from the
    environment, then overridden by flags) and handed to ``Pipeline``.
    """

    cwd: Path = Field(default_factory=Path.cwd, description="Directory the project is created in")
    skip_install: bool = Field(default=False, description="Do not run the package manager")
    skip_git: bool = Field(default=False, description="Do not initialise a git repository")
    force: bool = Field(default=False, description="Write into a non-empty directory without asking")
    verbose: bool = Field(default=False, description="Print debug output")
    install_timeout: int = Field(
        default=600, ge=30, description="Package-manager command timeout in seconds"
    )
    git_timeout: int = Field(default=60, ge=5, description="Git command timeout in seconds")
    commit_message: str = Field(default=DEFAULT_COMMIT_MESSAGE)

    @classmethod
    def from_env(cls, **overrides: Any) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            MRN_SKIP_INSTALL, MRN_SKIP_GIT, MRN_VERBOSE,
            MRN_INSTALL_TIMEOUT, MRN_GIT_TIMEOUT, MRN_COMMIT_MESSAGE.

        Keyword arguments take precedence over the environment.
        """
        kwargs: dict[str, Any] = {}
        for var, field in (
            ("MRN_SKIP_INSTALL", "skip_install"),
            ("MRN_SKIP_GIT", "skip_git"),
            ("MRN_VERBOSE", "verbose"),
        ):
            if os.environ.get(var):
                kwargs[field] = os.environ[var].strip().lower() in _TRUTHY
        if os.environ.get("MRN_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["MRN_INSTALL_TIMEOUT"])
        if os.environ.get("MRN_GIT_TIMEOUT"):
            kwargs["git_timeout"] = int(os.environ["MRN_GIT_TIMEOUT"])
        if os.environ.get("MRN_COMMIT_MESSAGE"):
            kwargs["commit_message"] = os.environ["MRN_COMMIT_MESSAGE"]

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
