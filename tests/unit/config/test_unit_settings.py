# tests/unit/config/test_unit_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

import pytest

from stagetime.config.settings import ConfigurationError, Settings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("PIPELINE_WORKSPACE", "NAME_PREFIX", "PIPELINE_TIMEOUT", "SERVICE_ACCOUNT"):
        monkeypatch.delenv(var, raising=False)


class TestSettingsDefaults:
    def test_pipeline_run_defaults(self):
        s = Settings(_env_file=None)
        assert s.service_account == "default"
        assert s.pipeline_timeout == "1h"
        assert s.name_prefix == "st"
        assert s.argocd_instance == "tekton-runs"

    def test_namespace_empty_by_default(self):
        assert Settings(_env_file=None).namespace == ""

    def test_default_delimiter(self):
        assert Settings(_env_file=None).default_delimiter_style == "curly"

    def test_logging_defaults(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "json"
        assert s.log_file is None


class TestSettingsEnvironment:
    def test_namespace_from_pipeline_workspace(self, monkeypatch):
        monkeypatch.setenv("PIPELINE_WORKSPACE", "tekton-ci")
        assert Settings(_env_file=None).namespace == "tekton-ci"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("PIPELINE_WORKSPACE=from-file\nPIPELINE_TIMEOUT=2h\n")
        s = Settings(_env_file=env_file)
        assert s.namespace == "from-file"
        assert s.pipeline_timeout == "2h"


class TestSettingsValidation:
    def test_uppercase_prefix(self):
        with pytest.raises(ConfigurationError, match="NAME_PREFIX"):
            Settings(_env_file=None, name_prefix="ST")

    def test_empty_service_account(self):
        with pytest.raises(ConfigurationError, match="SERVICE_ACCOUNT"):
            Settings(_env_file=None, service_account=" ")

    @pytest.mark.parametrize("timeout", ["forever", "1", "h"])
    def test_bad_timeout(self, timeout):
        with pytest.raises(ConfigurationError, match="PIPELINE_TIMEOUT"):
            Settings(_env_file=None, pipeline_timeout=timeout)

    @pytest.mark.parametrize("timeout", ["1h", "30m", "1h30m", "90s"])
    def test_good_timeout(self, timeout):
        assert Settings(_env_file=None, pipeline_timeout=timeout).pipeline_timeout == timeout

    def test_bad_namespace(self):
        with pytest.raises(ConfigurationError, match="PIPELINE_WORKSPACE"):
            Settings(_env_file=None, pipeline_workspace="Tekton_CI")

    def test_errors_joined(self):
        with pytest.raises(ConfigurationError, match="NAME_PREFIX.*PIPELINE_TIMEOUT"):
            Settings(_env_file=None, name_prefix="-", pipeline_timeout="never")

    def test_negative_retention(self):
        with pytest.raises(ValueError, match="log_retention"):
            Settings(_env_file=None, log_retention=-1)

    def test_unknown_delimiter_style(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, default_delimiter_style="diamond")


class TestLoadSettings:
    def test_with_overrides(self):
        s = load_settings(_env_file=None, log_level="DEBUG", pipeline_workspace="ci")
        assert s.log_level == "DEBUG"
        assert s.namespace == "ci"
