"""Tests for configuration loading."""

import pytest

from xmldoccheck.config import LOG_LEVEL_ENV, CheckerConfig, load_config
from xmldoccheck.errors import ConfigError


@pytest.fixture(autouse=True)
def no_env_level(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path)
    assert config == CheckerConfig()
    assert config.exclude == ["bin", "obj"]
    assert config.check_params and config.check_returns
    assert config.log_level == "WARNING"


def test_file_next_to_project(tmp_path, write_file):
    write_file(".xmldoccheck.toml", 'exclude = ["Generated"]\ncheck_returns = false\n')
    project = write_file("App.csproj", "<Project />")
    config = load_config(project)
    assert config.exclude == ["Generated"]
    assert config.check_returns is False
    assert config.check_params is True


def test_tool_table(tmp_path, write_file):
    path = write_file("settings.toml", '[tool.xmldoccheck]\nlog_level = "debug"\n')
    assert load_config(tmp_path, path).log_level == "DEBUG"


def test_env_overrides_log_level(tmp_path, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "info")
    assert load_config(tmp_path).log_level == "INFO"


def test_explicit_file_must_exist(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path, tmp_path / "missing.toml")


def test_invalid_toml(tmp_path, write_file):
    write_file(".xmldoccheck.toml", "exclude = [\n")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_unknown_key(tmp_path, write_file):
    write_file(".xmldoccheck.toml", "check_everything = true\n")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(tmp_path)


def test_unknown_log_level(tmp_path, write_file):
    write_file(".xmldoccheck.toml", 'log_level = "LOUD"\n')
    with pytest.raises(ConfigError, match="unknown log level"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "content,table",
    [
        ('tool = "x"\n', "'tool'"),
        ("[tool]\nxmldoccheck = 3\n", "'tool.xmldoccheck'"),
    ],
)
def test_tool_entry_must_be_a_table(tmp_path, write_file, content, table):
    write_file(".xmldoccheck.toml", content)
    with pytest.raises(ConfigError, match=f"{table} must be a table"):
        load_config(tmp_path)
