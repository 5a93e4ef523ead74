"""External commands run against the generated project.

Package-manager install/add, runtime probes and git initialization.  Nothing
here retries: every command is attempted once and failures surface as
``InstallError`` / ``GitError``.
"""

from .git import GitError, init_git, is_git_repo
from .package_manager import (
    InstallError,
    add_packages,
    get_add_command,
    get_exec_command,
    get_install_command,
    get_run_command,
    install_dependencies,
)
from .runtime import check_bun_installed, check_node_version, get_bun_version

__all__ = [
    # Package manager
    "InstallError",
    "add_packages",
    "get_add_command",
    "get_exec_command",
    "get_install_command",
    "get_run_command",
    "install_dependencies",
    # Runtime probes
    "check_bun_installed",
    "check_node_version",
    "get_bun_version",
    # Git
    "GitError",
    "init_git",
    "is_git_repo",
]
