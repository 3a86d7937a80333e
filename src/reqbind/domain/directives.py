"""Directive grammar: parsing a field's binding instruction.

A directive is a comma-separated list of segments::

    url-param=id
    url-query=since,layout=DateTime
    request-body

The first segment names the source: either the body keyword alone or a
``kind=source`` pair. Every following segment is ``key=value`` metadata.
A directive of exactly ``-`` marks a field the binder must skip.

INVARIANT: parsing either returns a complete Directive or raises a
DirectiveError. It never returns partial state.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from reqbind.domain.errors import InvalidDirectiveError, InvalidKeyValueError

SKIP = "-"
LAYOUT_META = "layout"


class DirectiveKind(StrEnum):
    """Request sources a directive can draw from."""

    PATH_PARAM = "url-param"
    QUERY_PARAM = "url-query"
    BODY = "request-body"


class Directive(BaseModel):
    """Parsed form of a field directive.

    ``kind`` keeps the raw token: unknown kinds are the binder's to reject,
    not the parser's.
    """

    model_config = {"frozen": True}

    kind: str
    source: str = ""
    metadata: dict[str, str] | None = None

    def render(self) -> str:
        """Serialize back to directive syntax."""
        head = self.kind if not self.source else f"{self.kind}={self.source}"
        if not self.metadata:
            return head
        tail = ",".join(f"{key}={value}" for key, value in self.metadata.items())
        return f"{head},{tail}"


def parse_directive(raw: str) -> Directive:
    """Parse *raw* into a Directive.

    Raises:
        InvalidDirectiveError: *raw* is empty or its first segment is blank.
        InvalidKeyValueError: a ``key=value`` segment is malformed.

    Examples:
        >>> parse_directive("url-query=since,layout=DateTime").metadata
        {'layout': 'DateTime'}
    """
    head, *rest = raw.split(",")
    if not head:
        raise InvalidDirectiveError(raw)

    head = head.strip()
    if not head or head == "=":
        raise InvalidDirectiveError(raw)

    if head == DirectiveKind.BODY:
        kind, source = head, ""
    else:
        kind, source = _split_pair(head, raw)

    if not rest:
        return Directive(kind=kind, source=source)

    metadata: dict[str, str] = {}
    for segment in rest:
        key, value = _split_pair(segment, raw)
        key, value = key.strip(), value.strip()
        if not key or not value:
            raise InvalidKeyValueError(raw)
        metadata[key] = value
    return Directive(kind=kind, source=source, metadata=metadata)


def _split_pair(segment: str, raw: str) -> tuple[str, str]:
    parts = segment.split("=")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidKeyValueError(raw)
    return parts[0], parts[1]
