"""Tests for configuration loading."""

from pathlib import Path

import pytest

from registry_census.config import Settings, load_config, settings_from_dict
from registry_census.crawler.registry_client import MCP_REGISTRY_URL
from registry_census.errors import ConfigError


def test_defaults_when_default_file_absent(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config() == Settings()


def test_explicit_missing_file_is_an_error(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_loads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "registry:\n"
        "  url: https://registry.test/servers\n"
        "  page_size: 50\n"
        "  timeout: 5\n"
        "output:\n"
        "  format: json\n"
        "  path: out/report.json\n"
    )
    settings = load_config(path)

    assert settings.registry_url == "https://registry.test/servers"
    assert settings.page_size == 50
    assert settings.timeout == 5.0
    assert settings.output_format == "json"
    assert settings.output_path == Path("out/report.json")


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path).registry_url == MCP_REGISTRY_URL


def test_page_size_clamped():
    assert settings_from_dict({"registry": {"page_size": 1000}}).page_size == 100
    assert settings_from_dict({"registry": {"page_size": 0}}).page_size == 1


@pytest.mark.parametrize("raw", [
    {"registry": {"timeout": 0}},
    {"registry": {"page_size": "lots"}},
    {"output": {"format": "xml"}},
    {"registry": ["not", "a", "mapping"]},
])
def test_invalid_settings(raw):
    with pytest.raises(ConfigError):
        settings_from_dict(raw)


def test_non_mapping_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_broken_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("registry: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(path)
