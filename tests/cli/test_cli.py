"""Tests for the CLI."""

import json

import httpx
import pytest
from typer.testing import CliRunner

from make_mcp import __version__
from make_mcp.cli import main as cli_main
from make_mcp.cli import ux
from make_mcp.cli.main import app


@pytest.fixture
def runner():
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def upstream(monkeypatch, tmp_path, make_adapter):
    """Route the CLI's adapter to the mock Make.com API."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MAKE_API_TOKEN", "cli-token")
    # keep INFO request logs out of the captured output
    monkeypatch.setenv("MAKE_LOG_LEVEL", "WARNING")
    built = {}

    def use(responder=None):
        def _factory(token, base_url, config=None):
            kwargs = {"token": token}
            if responder is not None:
                kwargs["responder"] = responder
            adapter, handler = make_adapter(**kwargs)
            built["handler"] = handler
            return adapter

        monkeypatch.setattr(cli_main, "MakeAdapter", _factory)
        return built

    return use


def test_version(runner):
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_help_lists_commands(runner):
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("serve", "scenarios", "logs", "run"):
        assert command in result.stdout


def test_scenarios_json(runner, upstream):
    built = upstream()

    result = runner.invoke(app, ["scenarios", "--format", "json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [s["name"] for s in payload["scenarios"]] == ["Sync CRM", "Nightly export", "Draft"]
    assert built["handler"].requests[0].headers["Authorization"] == "Token cli-token"


def test_scenarios_table(runner, upstream, monkeypatch):
    monkeypatch.setattr(ux.console, "width", 200)
    upstream()

    result = runner.invoke(app, ["scenarios"])

    assert result.exit_code == 0, result.output
    assert "Sync CRM" in result.stdout
    assert "Sales" in result.stdout


def test_logs_passes_limit(runner, upstream):
    built = upstream()

    result = runner.invoke(app, ["logs", "101", "--limit", "3", "--format", "json"])

    assert result.exit_code == 0, result.output
    assert built["handler"].requests[0].url.params["limit"] == "3"
    assert [log["id"] for log in json.loads(result.stdout)["logs"]] == ["exec-1", "exec-2"]


def test_run_sends_data(runner, upstream):
    built = upstream()

    result = runner.invoke(app, ["run", "101", "--data", '{"a": 1}'])

    assert result.exit_code == 0, result.output
    assert "exec-99" in result.stdout
    assert json.loads(built["handler"].requests[0].content) == {"data": {"a": 1}}


def test_run_rejects_non_object_data(runner, upstream):
    built = upstream()

    result = runner.invoke(app, ["run", "101", "--data", "[1, 2]"])

    assert result.exit_code == 2
    assert "handler" not in built


def test_upstream_failure_exits_with_error(runner, upstream):
    def responder(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "Invalid token"}, request=request)

    upstream(responder)

    result = runner.invoke(app, ["scenarios", "--format", "json"])

    assert result.exit_code == 1
    assert "List scenarios failed: upstream returned 401: Invalid token" in result.output


def test_rejects_unknown_format(runner, upstream):
    upstream()

    result = runner.invoke(app, ["scenarios", "--format", "yaml"])

    assert result.exit_code == 2
