"""InspectService: developer-facing views of the binding engine.

Four read-only surfaces:
- parse_directive: Parse a directive string and show its parts
- list_layouts: The named timestamp layouts with a rendered example
- coerce_value: Coerce a value into a named field type
- describe_record: The binding table of a record class

None of these touch a request; they exist to check directives and
record declarations before they are wired into a service.
"""

from __future__ import annotations

import importlib
import logging
from datetime import UTC, date, datetime, time
from typing import TYPE_CHECKING, Any

from reqbind.binding.records import describe_fields
from reqbind.domain.coercion import UNSUPPORTED, coerce
from reqbind.domain.directives import LAYOUT_META, SKIP, DirectiveKind, parse_directive
from reqbind.domain.errors import BindingError, DirectiveError
from reqbind.domain.layouts import LAYOUTS, format_timestamp
from reqbind.domain.types import TYPE_NAMES
from reqbind.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from reqbind.config.settings import ReqbindSettings

logger = logging.getLogger(__name__)

# 2006-01-02 15:04:05.123456 UTC, rendered in every layout by list_layouts.
EXAMPLE_TIME = datetime(2006, 1, 2, 15, 4, 5, 123456, tzinfo=UTC)


class InspectService:
    """Read-only inspection operations driven by the process settings."""

    def __init__(self, settings: ReqbindSettings) -> None:
        self._settings = settings

    # ------------------------------------------------------------------
    # parse_directive
    # ------------------------------------------------------------------

    def parse_directive(self, raw: str) -> ServiceResult:
        """Parse *raw* and report its kind, source, and metadata."""
        op = "parse_directive"
        if raw == SKIP:
            return ServiceResult(ok=True, op=op, data={"directive": raw, "skip": True})
        try:
            directive = parse_directive(raw)
        except DirectiveError as exc:
            return ServiceResult.failure(op, "INVALID_DIRECTIVE", exc, directive=raw)

        warnings: list[str] = []
        if directive.kind not in DirectiveKind:
            warnings.append(f"Unknown kind {directive.kind!r}; binding this field will fail")
        layout = (directive.metadata or {}).get(LAYOUT_META)
        if layout is not None and layout not in LAYOUTS:
            warnings.append(
                f"Unknown layout {layout!r}; {self._settings.default_layout} will be used"
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "kind": directive.kind,
                "source": directive.source,
                "metadata": directive.metadata or {},
                "canonical": directive.render(),
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # list_layouts
    # ------------------------------------------------------------------

    def list_layouts(self) -> ServiceResult:
        """List every named timestamp layout with an example rendering."""
        items = [
            {
                "name": layout.name,
                "pattern": layout.pattern.replace("{frac}", "." + "0" * layout.fraction),
                "example": format_timestamp(EXAMPLE_TIME, layout.name),
                "default": layout.name == self._settings.default_layout,
            }
            for layout in LAYOUTS.values()
        ]
        return ServiceResult(ok=True, op="list_layouts", data={"count": len(items), "items": items})

    # ------------------------------------------------------------------
    # coerce_value
    # ------------------------------------------------------------------

    def coerce_value(self, type_name: str, raw: str, *, layout: str | None = None) -> ServiceResult:
        """Coerce *raw* into the field type called *type_name*."""
        op = "coerce_value"
        annotation = TYPE_NAMES.get(type_name)
        if annotation is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="UNKNOWN_TYPE",
                    message=f"Unknown field type {type_name!r}",
                    detail={"known": sorted(TYPE_NAMES)},
                ),
            )

        metadata = {LAYOUT_META: layout} if layout else None
        try:
            value = coerce(
                annotation,
                raw,
                metadata,
                default_layout=self._settings.default_layout,
            )
        except ValueError as exc:
            logger.debug("Coercion of %r to %s failed", raw, type_name, exc_info=True)
            return ServiceResult.failure(op, "COERCION_FAILED", exc, type=type_name, raw=raw)

        return ServiceResult(
            ok=True,
            op=op,
            data={"type": type_name, "raw": raw, "value": _jsonable(value)},
        )

    # ------------------------------------------------------------------
    # describe_record
    # ------------------------------------------------------------------

    def describe_record(self, target: str) -> ServiceResult:
        """Show the binding table of the record class named ``module:Class``."""
        op = "describe_record"
        module_name, _, attr = target.partition(":")
        if not module_name or not attr:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_TARGET",
                    message=f"Expected MODULE:CLASS, got {target!r}",
                ),
            )
        try:
            record_type: Any = importlib.import_module(module_name)
            for part in attr.split("."):
                record_type = getattr(record_type, part)
        except (ImportError, AttributeError) as exc:
            return ServiceResult.failure(op, "NOT_FOUND", exc, target=target)

        try:
            table = describe_fields(record_type, directive_key=self._settings.directive_key)
        except BindingError as exc:
            return ServiceResult.failure(op, "NOT_A_RECORD", exc, target=target)

        fields: list[dict[str, Any]] = []
        warnings: list[str] = []
        body_fields: list[str] = []
        for field in table:
            row: dict[str, Any] = {"name": field.name, "directive": field.directive}
            if field.directive and field.directive != SKIP:
                try:
                    directive = parse_directive(field.directive)
                except DirectiveError as exc:
                    warnings.append(f"{field.name}: {exc}")
                else:
                    row["kind"] = directive.kind
                    row["source"] = directive.source
                    if directive.kind == DirectiveKind.BODY:
                        body_fields.append(field.name)
                    elif directive.kind not in DirectiveKind:
                        warnings.append(f"{field.name}: unknown kind {directive.kind!r}")
            fields.append(row)

        if len(body_fields) > 1:
            warnings.append(f"More than one request-body field: {', '.join(body_fields)}")
        return ServiceResult(
            ok=True,
            op=op,
            data={"record": target, "fields": fields},
            warnings=warnings,
        )


def _jsonable(value: Any) -> Any:
    if value is UNSUPPORTED:
        return None
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value
