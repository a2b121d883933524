"""Tests for the command-line entry point."""

import json

import pytest

from conftest import make_entry
from registry_census import main as cli
from registry_census.analyzers.aggregator import summarize
from registry_census.errors import TransportFailure


@pytest.fixture
def no_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_json_output(no_config, monkeypatch, capsys):
    captured = {}

    def fake_run(settings, limit, reporter):
        captured["limit"] = limit
        return summarize([make_entry(name="one")])

    monkeypatch.setattr(cli, "run_analysis", fake_run)

    assert cli.main(["--json", "--limit", "5"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["totalServers"] == 1
    assert captured["limit"] == 5


def test_output_file_written(no_config, monkeypatch):
    monkeypatch.setattr(cli, "run_analysis", lambda s, l, r: summarize([make_entry()]))

    target = no_config / "report.json"
    assert cli.main(["--json", "--output", str(target)]) == 0
    assert json.loads(target.read_text())["categories"]["bundleable"] == 1


def test_fetch_failure_exits_nonzero(no_config, monkeypatch, capsys):
    def failing(settings, limit, reporter):
        raise TransportFailure("Registry returned HTTP 502", status_code=502)

    monkeypatch.setattr(cli, "run_analysis", failing)

    assert cli.main(["--json"]) == 1
    assert capsys.readouterr().out == ""


def test_missing_explicit_config_exits_nonzero(no_config):
    assert cli.main(["--config", str(no_config / "missing.yaml")]) == 1


@pytest.mark.parametrize("value", ["0", "-3", "ten"])
def test_limit_must_be_positive(value):
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--limit", value])


def test_unwritable_output_exits_nonzero(no_config, monkeypatch, capsys):
    monkeypatch.setattr(cli, "run_analysis", lambda s, l, r: summarize([make_entry()]))

    # A directory cannot be written as a file
    target = no_config / "reports"
    target.mkdir()

    assert cli.main(["--json", "--output", str(target)]) == 1
    assert "Could not write report" in capsys.readouterr().err
