"""Tests for configuration loading and its effect on deprecations and frame filtering."""

import logging
import os
import subprocess
import sys
import warnings

import pytest

import specmeta
from specmeta.config import get_config, reset_config
from specmeta.logger import get_logger
from specmeta.metadata import GroupMetadataFactory
from specmeta.metadata.deprecation import deprecate, format_notice
from specmeta.metadata.location import CallerFilter

ENV_VARS = ("SPECMETA_DEPRECATIONS", "SPECMETA_LOG_LEVEL", "SPECMETA_LOG_FILE", "SPECMETA_CONFIG")


@pytest.fixture
def clean_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        # record the original state so values loaded from .env are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_config()
    yield tmp_path
    reset_config()


def test_defaults(clean_config):
    config = get_config()
    assert config.deprecations == "warn"
    assert config.get("log_level") == "WARNING"
    assert config.framework_patterns == []


def test_singleton(clean_config):
    assert get_config() is get_config()


def test_yaml_file(clean_config):
    (clean_config / ".specmeta.yml").write_text(
        "deprecations: log\n"
        "framework_patterns:\n"
        "  - /opt/framework/\n"
    )
    config = get_config()
    assert config.deprecations == "log"
    assert config.framework_patterns == ["/opt/framework/"]


def test_config_path_from_environment(clean_config, monkeypatch):
    (clean_config / "custom.yml").write_text("log_level: DEBUG\n")
    monkeypatch.setenv("SPECMETA_CONFIG", str(clean_config / "custom.yml"))
    assert get_config().get("log_level") == "DEBUG"


def test_environment_overrides_file(clean_config, monkeypatch):
    (clean_config / ".specmeta.yml").write_text("deprecations: log\n")
    monkeypatch.setenv("SPECMETA_DEPRECATIONS", "SILENT")
    assert get_config().deprecations == "silent"


def test_dotenv_file_is_loaded(clean_config):
    (clean_config / ".env").write_text("SPECMETA_DEPRECATIONS=log\n")
    assert get_config().deprecations == "log"


def test_invalid_deprecation_mode(clean_config, monkeypatch):
    monkeypatch.setenv("SPECMETA_DEPRECATIONS", "loud")
    with pytest.raises(ValueError):
        get_config()


def test_invalid_config_file(clean_config):
    (clean_config / ".specmeta.yml").write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        get_config()


def test_set_and_update(clean_config):
    config = get_config()
    config.set("log_level", "INFO")
    config.update({"framework_patterns": ["x"]})
    assert config.get("log_level") == "INFO"
    assert config.framework_patterns == ["x"]
    assert config.get("missing", 3) == 3


def test_caller_filter_uses_configured_patterns(clean_config):
    (clean_config / ".specmeta.yml").write_text("framework_patterns: ['/opt/framework/']\n")
    caller_filter = CallerFilter()
    assert caller_filter("/opt/framework/dsl.py:3")
    assert not caller_filter("/app/spec/widget_spec.py:3")


def test_silent_deprecations(clean_config, monkeypatch):
    monkeypatch.setenv("SPECMETA_DEPRECATIONS", "silent")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        deprecate("`metadata['describes']`", "`metadata['described_class']`")


def test_logged_deprecations(clean_config, monkeypatch, caplog):
    monkeypatch.setenv("SPECMETA_DEPRECATIONS", "log")
    with caplog.at_level(logging.WARNING, logger="specmeta.deprecation"):
        deprecate("`metadata['describes']`", "`metadata['described_class']`")
    assert "`metadata['describes']` is deprecated" in caplog.text


def test_warned_deprecations(clean_config):
    with pytest.warns(DeprecationWarning, match="described_class"):
        deprecate("`metadata['describes']`", "`metadata['described_class']`")


def test_format_notice():
    assert format_notice("x") == "x is deprecated."
    assert format_notice("x", "y") == "x is deprecated. Use y instead."


def test_import_survives_invalid_settings(clean_config):
    repo_root = os.path.dirname(os.path.dirname(os.path.abspath(specmeta.__file__)))
    env = dict(os.environ, SPECMETA_DEPRECATIONS="loud", PYTHONPATH=repo_root)
    (clean_config / ".specmeta.yml").write_text("deprecations: [unclosed\n")

    result = subprocess.run(
        [sys.executable, "-c", "import specmeta, specmeta.outline"],
        cwd=str(clean_config), env=env, capture_output=True, text=True,
    )
    assert result.returncode == 0, result.stderr


def test_logger_falls_back_to_defaults(clean_config, monkeypatch):
    monkeypatch.setenv("SPECMETA_DEPRECATIONS", "loud")
    logger = get_logger("fallback-check")
    assert logger.handlers
    assert logger.handlers[0].level == logging.WARNING

    with pytest.raises(ValueError):
        get_config()


def test_invalid_framework_pattern_is_skipped(clean_config):
    (clean_config / ".specmeta.yml").write_text("framework_patterns: ['(unclosed']\n")
    group = GroupMetadataFactory.create(None, {}, "x")
    assert group["full_description"] == "x"
    assert group["file_path"].endswith("test_config.py")
