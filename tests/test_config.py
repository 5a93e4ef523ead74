"""Unit tests for runtime settings (create_mrn_app.config).

Tests cover:
- Settings defaults and field validation
- Settings.from_env (environment variables, truthy spellings)
- Keyword overrides taking precedence over the environment
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from create_mrn_app.config import DEFAULT_COMMIT_MESSAGE, Settings


# ---------------------------------------------------------------------------
# Defaults & validation
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        settings = Settings()
        assert settings.cwd == Path.cwd()
        assert settings.skip_install is False
        assert settings.skip_git is False
        assert settings.force is False
        assert settings.verbose is False
        assert settings.install_timeout == 600
        assert settings.git_timeout == 60
        assert settings.commit_message == DEFAULT_COMMIT_MESSAGE

    @pytest.mark.unit
    def test_install_timeout_lower_bound(self):
        with pytest.raises(ValidationError):
            Settings(install_timeout=5)

    @pytest.mark.unit
    def test_git_timeout_lower_bound(self):
        with pytest.raises(ValidationError):
            Settings(git_timeout=1)

    @pytest.mark.unit
    def test_cwd_accepts_string(self, tmp_path: Path):
        settings = Settings(cwd=str(tmp_path))
        assert settings.cwd == tmp_path


# ---------------------------------------------------------------------------
# from_env
# ---------------------------------------------------------------------------


class TestSettingsFromEnv:
    @pytest.mark.unit
    def test_empty_environment_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        assert settings.skip_install is False
        assert settings.install_timeout == 600

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_truthy_spellings(self, value):
        with patch.dict(os.environ, {"MRN_SKIP_INSTALL": value}, clear=True):
            assert Settings.from_env().skip_install is True

    @pytest.mark.unit
    def test_falsy_value(self):
        with patch.dict(os.environ, {"MRN_SKIP_GIT": "0"}, clear=True):
            assert Settings.from_env().skip_git is False

    @pytest.mark.unit
    def test_reads_timeouts_and_message(self):
        env = {
            "MRN_INSTALL_TIMEOUT": "900",
            "MRN_GIT_TIMEOUT": "30",
            "MRN_COMMIT_MESSAGE": "chore: init",
            "MRN_VERBOSE": "true",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        assert settings.install_timeout == 900
        assert settings.git_timeout == 30
        assert settings.commit_message == "chore: init"
        assert settings.verbose is True

    @pytest.mark.unit
    def test_invalid_timeout_rejected(self):
        with patch.dict(os.environ, {"MRN_INSTALL_TIMEOUT": "10"}, clear=True):
            with pytest.raises(ValidationError):
                Settings.from_env()

    @pytest.mark.unit
    def test_overrides_win(self):
        with patch.dict(os.environ, {"MRN_SKIP_INSTALL": "1"}, clear=True):
            settings = Settings.from_env(skip_install=False, force=True)
        assert settings.skip_install is False
        assert settings.force is True

    @pytest.mark.unit
    def test_none_overrides_ignored(self):
        with patch.dict(os.environ, {"MRN_SKIP_GIT": "yes"}, clear=True):
            settings = Settings.from_env(skip_git=None, verbose=None)
        assert settings.skip_git is True
        assert settings.verbose is False
