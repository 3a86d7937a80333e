"""Tests for the directive grammar."""

from __future__ import annotations

import pytest

from reqbind.domain.directives import Directive, DirectiveKind, parse_directive
from reqbind.domain.errors import (
    DirectiveError,
    InvalidDirectiveError,
    InvalidKeyValueError,
)


class TestParseDirective:
    def test_path_param(self) -> None:
        directive = parse_directive("url-param=field")
        assert directive.kind == DirectiveKind.PATH_PARAM
        assert directive.source == "field"
        assert directive.metadata is None

    def test_query_param(self) -> None:
        directive = parse_directive("url-query=query")
        assert directive.kind == DirectiveKind.QUERY_PARAM
        assert directive.source == "query"

    def test_body_keyword(self) -> None:
        directive = parse_directive("request-body")
        assert directive.kind == DirectiveKind.BODY
        assert directive.source == ""
        assert directive.metadata is None

    def test_body_keyword_is_trimmed(self) -> None:
        assert parse_directive("  request-body ").kind == DirectiveKind.BODY

    def test_metadata(self) -> None:
        directive = parse_directive("url-param=field,hello=world,where=somewhere")
        assert directive.metadata == {"hello": "world", "where": "somewhere"}

    def test_metadata_is_trimmed(self) -> None:
        directive = parse_directive("url-query=since, layout = DateTime ")
        assert directive.metadata == {"layout": "DateTime"}

    def test_body_metadata_is_kept(self) -> None:
        directive = parse_directive("request-body,format=json")
        assert directive.kind == DirectiveKind.BODY
        assert directive.metadata == {"format": "json"}

    def test_unknown_kind_is_not_rejected(self) -> None:
        """Rejecting unknown kinds is the binder's job."""
        directive = parse_directive("header=x-token")
        assert directive.kind == "header"
        assert directive.source == "x-token"

    def test_result_is_frozen(self) -> None:
        directive = parse_directive("url-param=id")
        with pytest.raises(Exception):
            directive.source = "other"  # type: ignore[misc]


class TestInvalidDirective:
    @pytest.mark.parametrize("raw", ["", "   ", "\t", ",layout=DateTime", "=", " = "])
    def test_blank_first_segment(self, raw: str) -> None:
        with pytest.raises(InvalidDirectiveError):
            parse_directive(raw)

    @pytest.mark.parametrize(
        "raw",
        [
            "url-param",
            "url-param=",
            "=field",
            "url-param=a=b",
            "url-param==field",
        ],
    )
    def test_bad_kind_source_pair(self, raw: str) -> None:
        with pytest.raises(InvalidKeyValueError):
            parse_directive(raw)

    @pytest.mark.parametrize(
        "raw",
        [
            "url-param=field,badmeta",
            "url-param=field,  =  ",
            "url-param=field,hello=",
            "url-param=field,hello=           ,where=somewhere",
            "url-param=field,=world",
            "url-param=field,a=b=c",
            "url-param=field,",
            "request-body,badmeta",
        ],
    )
    def test_bad_metadata(self, raw: str) -> None:
        with pytest.raises(InvalidKeyValueError):
            parse_directive(raw)

    def test_error_carries_directive(self) -> None:
        with pytest.raises(DirectiveError) as exc_info:
            parse_directive("url-param=field,badmeta")
        assert exc_info.value.directive == "url-param=field,badmeta"
        assert isinstance(exc_info.value, ValueError)


class TestRender:
    @pytest.mark.parametrize(
        "directive",
        [
            Directive(kind="url-param", source="id"),
            Directive(kind="url-query", source="since", metadata={"layout": "DateTime"}),
            Directive(kind="url-query", source="q", metadata={"a": "1", "b": "2"}),
            Directive(kind="request-body"),
            Directive(kind="request-body", metadata={"format": "json"}),
        ],
    )
    def test_round_trip(self, directive: Directive) -> None:
        assert parse_directive(directive.render()) == directive

    def test_render_body(self) -> None:
        assert Directive(kind="request-body").render() == "request-body"

    def test_render_with_metadata(self) -> None:
        directive = Directive(kind="url-param", source="id", metadata={"layout": "Kitchen"})
        assert directive.render() == "url-param=id,layout=Kitchen"
