"""Tests for the describe command."""

import json
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from reqbind.cli import cli

RECORDS = '''
from dataclasses import dataclass
from typing import Annotated

from reqbind import From, bound


@dataclass
class Search:
    term: str = bound("url-query=q", default="")
    page: Annotated[int, From("url-query=page")] = 1
    cursor: str = bound("-", default="")
'''


@pytest.fixture
def records_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    pkg = tmp_path / "importable"
    pkg.mkdir()
    (pkg / "cli_records.py").write_text(RECORDS)
    monkeypatch.syspath_prepend(str(pkg))
    monkeypatch.delitem(sys.modules, "cli_records", raising=False)
    return "cli_records"


class TestDescribeCommand:
    def test_table(self, cli_runner: CliRunner, records_module: str) -> None:
        result = cli_runner.invoke(cli, ["describe", f"{records_module}:Search"])
        assert result.exit_code == 0
        assert "term" in result.output
        assert "url-query" in result.output
        assert "skip" in result.output

    def test_json(self, cli_runner: CliRunner, records_module: str) -> None:
        result = cli_runner.invoke(cli, ["--json", "describe", f"{records_module}:Search"])
        assert result.exit_code == 0
        fields = json.loads(result.output)["data"]["fields"]
        assert [f["name"] for f in fields] == ["term", "page", "cursor"]
        assert fields[1]["source"] == "page"

    def test_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["describe", "reqbind_missing_mod:Thing"])
        assert result.exit_code == 1
        assert "describe_record" in result.output
