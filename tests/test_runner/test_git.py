"""Tests for git initialization (create_mrn_app.runner.git)."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from create_mrn_app.config import DEFAULT_COMMIT_MESSAGE
from create_mrn_app.runner import GitError, init_git, is_git_repo

_EXEC = "create_mrn_app.runner.git.asyncio.create_subprocess_exec"


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


class TestIsGitRepo:
    def test_false_for_plain_dir(self, tmp_path: Path):
        assert is_git_repo(tmp_path) is False

    def test_true_with_git_dir(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        assert is_git_repo(tmp_path) is True


class TestInitGit:
    @pytest.mark.asyncio
    async def test_runs_init_add_commit(self, tmp_path: Path, mock_subprocess):
        proc = mock_subprocess()
        with patch(_EXEC, new=AsyncMock(return_value=proc)) as mock_exec:
            created = await init_git(tmp_path)

        assert created is True
        commands = [call.args for call in mock_exec.await_args_list]
        assert commands == [
            ("git", "init"),
            ("git", "add", "-A"),
            ("git", "commit", "-m", DEFAULT_COMMIT_MESSAGE),
        ]
        assert mock_exec.await_args.kwargs["cwd"] == str(tmp_path)

    @pytest.mark.asyncio
    async def test_custom_message(self, tmp_path: Path, mock_subprocess):
        with patch(_EXEC, new=AsyncMock(return_value=mock_subprocess())) as mock_exec:
            await init_git(tmp_path, message="chore: scaffold")
        assert mock_exec.await_args.args[-1] == "chore: scaffold"

    @pytest.mark.asyncio
    async def test_existing_repo_is_left_alone(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        with patch(_EXEC, new=AsyncMock()) as mock_exec:
            created = await init_git(tmp_path)
        assert created is False
        mock_exec.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_raises_git_error(self, tmp_path: Path, mock_subprocess):
        proc = mock_subprocess(stderr="Please tell me who you are", returncode=128)
        with patch(_EXEC, new=AsyncMock(return_value=proc)):
            with pytest.raises(GitError) as exc_info:
                await init_git(tmp_path)
        assert exc_info.value.command == "git init"
        assert "who you are" in exc_info.value.stderr

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, tmp_path: Path, mock_subprocess):
        proc = mock_subprocess()
        proc.communicate = AsyncMock(side_effect=asyncio.TimeoutError)
        with patch(_EXEC, new=AsyncMock(return_value=proc)):
            with pytest.raises(GitError, match="timed out"):
                await init_git(tmp_path, timeout=1)
        proc.kill.assert_called_once()
        proc.wait.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_git_propagates(self, tmp_path: Path):
        with patch(_EXEC, new=AsyncMock(side_effect=FileNotFoundError("git"))):
            with pytest.raises(FileNotFoundError):
                await init_git(tmp_path)
