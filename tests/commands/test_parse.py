"""Tests for the parse command."""

import json

from click.testing import CliRunner

from reqbind.cli import cli


class TestParseCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "url-query=since,layout=DateTime"])
        assert result.exit_code == 0
        assert "parse_directive" in result.output
        assert "kind: url-query" in result.output
        assert "source: since" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "parse", "request-body"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["kind"] == "request-body"
        assert data["data"]["canonical"] == "request-body"

    def test_invalid_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "url-param=a=b"])
        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert "invalid directive key-value pair" in result.output

    def test_unknown_kind_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "header=x-token"])
        assert result.exit_code == 0
        assert "WARNING: Unknown kind 'header'" in result.output
