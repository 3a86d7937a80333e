"""Tests for InspectService."""

import sys
import textwrap
from pathlib import Path

import pytest

from reqbind.config.settings import ReqbindSettings
from reqbind.services.inspect import InspectService

RECORDS = textwrap.dedent(
    """
    from dataclasses import dataclass

    from reqbind import bound


    @dataclass
    class Body:
        id: int = 0


    @dataclass
    class Update:
        id: int = bound("url-param=id", default=0)
        body: Body | None = bound("request-body", default=None)
        note: str = bound("-", default="")
        plain: str = ""


    @dataclass
    class Broken:
        a: int = bound("url-query=a,bad", default=0)
        b: str = bound("header=x-b", default="")
        c: Body = bound("request-body", default_factory=Body)
        d: Body = bound("request-body", default_factory=Body)


    class Plain:
        pass
    """
)


@pytest.fixture
def service(tmp_path: Path) -> InspectService:
    return InspectService(ReqbindSettings.load(start=tmp_path))


@pytest.fixture
def records_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write a records module to an importable directory and return its name."""
    pkg = tmp_path / "importable"
    pkg.mkdir()
    (pkg / "sample_records.py").write_text(RECORDS)
    monkeypatch.syspath_prepend(str(pkg))
    monkeypatch.delitem(sys.modules, "sample_records", raising=False)
    return "sample_records"


class TestParseDirective:
    def test_param(self, service: InspectService) -> None:
        result = service.parse_directive("url-param=id")
        assert result.ok
        assert result.data == {
            "kind": "url-param",
            "source": "id",
            "metadata": {},
            "canonical": "url-param=id",
        }
        assert result.warnings == []

    def test_metadata_trimmed(self, service: InspectService) -> None:
        result = service.parse_directive(" url-query=since , layout = DateTime ")
        assert result.data["metadata"] == {"layout": "DateTime"}
        assert result.data["canonical"] == "url-query=since,layout=DateTime"

    def test_skip(self, service: InspectService) -> None:
        result = service.parse_directive("-")
        assert result.ok
        assert result.data == {"directive": "-", "skip": True}

    def test_invalid(self, service: InspectService) -> None:
        result = service.parse_directive("url-param")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_DIRECTIVE"
        assert result.error.detail["exception"] == "InvalidKeyValueError"
        assert result.error.detail["directive"] == "url-param"

    def test_unknown_kind_warns(self, service: InspectService) -> None:
        result = service.parse_directive("header=x-token")
        assert result.ok
        assert any("Unknown kind 'header'" in w for w in result.warnings)

    def test_unknown_layout_warns(self, service: InspectService) -> None:
        result = service.parse_directive("url-query=t,layout=Sometime")
        assert result.ok
        assert any("RFC3339 will be used" in w for w in result.warnings)


class TestListLayouts:
    def test_all_layouts(self, service: InspectService) -> None:
        result = service.list_layouts()
        assert result.ok
        assert result.data["count"] == 19
        names = [item["name"] for item in result.data["items"]]
        assert names[0] == "Layout"
        assert "RFC3339Nano" in names

    def test_examples_and_default(self, service: InspectService) -> None:
        items = {item["name"]: item for item in service.list_layouts().data["items"]}
        assert items["RFC3339"]["example"] == "2006-01-02T15:04:05+0000"
        assert items["RFC3339"]["default"] is True
        assert items["DateOnly"]["example"] == "2006-01-02"
        assert items["DateOnly"]["default"] is False
        assert items["StampMilli"]["pattern"] == "%b %d %H:%M:%S.000"

    def test_default_follows_settings(self, tmp_path: Path) -> None:
        settings = ReqbindSettings.load(start=tmp_path, default_layout="Kitchen")
        items = InspectService(settings).list_layouts().data["items"]
        assert [i["name"] for i in items if i["default"]] == ["Kitchen"]


class TestCoerceValue:
    def test_uint8(self, service: InspectService) -> None:
        result = service.coerce_value("uint8", "200")
        assert result.ok
        assert result.data == {"type": "uint8", "raw": "200", "value": 200}

    def test_bool(self, service: InspectService) -> None:
        assert service.coerce_value("bool", "T").data["value"] is True

    def test_loose_bool_spelling_fails(self, service: InspectService) -> None:
        result = service.coerce_value("bool", "yes")
        assert result.error is not None
        assert result.error.code == "COERCION_FAILED"

    def test_datetime_with_layout(self, service: InspectService) -> None:
        result = service.coerce_value("datetime", "2024-05-01 10:00:00", layout="DateTime")
        assert result.data["value"] == "2024-05-01T10:00:00"

    def test_datetime_default_layout(self, service: InspectService) -> None:
        result = service.coerce_value("datetime", "2024-05-01T10:00:00Z")
        assert result.data["value"] == "2024-05-01T10:00:00+00:00"

    def test_overflow(self, service: InspectService) -> None:
        result = service.coerce_value("uint8", "256")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "COERCION_FAILED"
        assert result.error.detail["exception"] == "ValidationError"
        assert result.error.detail["raw"] == "256"

    def test_bad_timestamp(self, service: InspectService) -> None:
        result = service.coerce_value("datetime", "yesterday")
        assert result.error is not None
        assert result.error.code == "COERCION_FAILED"
        assert result.error.detail["exception"] == "ValueError"

    def test_unknown_type(self, service: InspectService) -> None:
        result = service.coerce_value("complex", "1")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_TYPE"
        assert "int8" in result.error.detail["known"]


class TestDescribeRecord:
    def test_table(self, service: InspectService, records_module: str) -> None:
        result = service.describe_record(f"{records_module}:Update")
        assert result.ok
        assert result.data["record"] == f"{records_module}:Update"
        assert result.data["fields"] == [
            {"name": "id", "directive": "url-param=id", "kind": "url-param", "source": "id"},
            {"name": "body", "directive": "request-body", "kind": "request-body", "source": ""},
            {"name": "note", "directive": "-"},
            {"name": "plain", "directive": None},
        ]
        assert result.warnings == []

    def test_warnings(self, service: InspectService, records_module: str) -> None:
        result = service.describe_record(f"{records_module}:Broken")
        assert result.ok
        joined = "\n".join(result.warnings)
        assert "a: invalid directive key-value pair" in joined
        assert "b: unknown kind 'header'" in joined
        assert "More than one request-body field: c, d" in joined

    def test_invalid_target(self, service: InspectService) -> None:
        result = service.describe_record("no_colon")
        assert result.error is not None
        assert result.error.code == "INVALID_TARGET"

    def test_missing_module(self, service: InspectService) -> None:
        result = service.describe_record("reqbind_no_such_module:Thing")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail["exception"] == "ModuleNotFoundError"

    def test_missing_class(self, service: InspectService, records_module: str) -> None:
        result = service.describe_record(f"{records_module}:Nope")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_not_a_record(self, service: InspectService, records_module: str) -> None:
        result = service.describe_record(f"{records_module}:Plain")
        assert result.error is not None
        assert result.error.code == "NOT_A_RECORD"
