"""Type-directed coercion of textual request values.

``coerce()`` turns the raw string taken from a path segment or query
parameter into a value of the field's declared type. Parse failures are
raised exactly as the underlying parser reports them: a pydantic
``ValidationError`` for booleans and numbers, the ``ValueError`` from
``datetime.strptime`` for timestamps.

Parsing is strict about spelling. Booleans accept only ``1 t T TRUE true
True`` and ``0 f F FALSE false False``; integers are plain decimal digits
with an optional sign; floats take no surrounding whitespace and no digit
separators.

Types outside the supported set are a deliberate no-op: ``coerce()``
returns :data:`UNSUPPORTED` and the caller leaves the field alone.
"""

from __future__ import annotations

import functools
import re
import struct
from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Any, Final

from pydantic import AfterValidator, BeforeValidator, Field, TypeAdapter
from pydantic_core import PydanticCustomError

from reqbind.domain.directives import LAYOUT_META
from reqbind.domain.layouts import DEFAULT_LAYOUT, parse_timestamp
from reqbind.domain.types import (
    FloatWidth,
    IntWidth,
    find_marker,
    is_optional,
    unwrap_annotation,
)


class _Unsupported:
    def __repr__(self) -> str:
        return "UNSUPPORTED"


UNSUPPORTED: Final = _Unsupported()

BOOL_LITERALS: Final[Mapping[str, bool]] = {
    **dict.fromkeys(("1", "t", "T", "TRUE", "true", "True"), True),
    **dict.fromkeys(("0", "f", "F", "FALSE", "false", "False"), False),
}

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _bool_literal(value: str) -> bool:
    try:
        return BOOL_LITERALS[value]
    except KeyError:
        raise PydanticCustomError(
            "bool_parsing", "Input should be a valid boolean, unable to interpret input"
        ) from None


def _decimal_text(value: str) -> str:
    if not _DECIMAL.fullmatch(value):
        raise PydanticCustomError(
            "int_parsing", "Input should be a valid integer, unable to parse string as an integer"
        )
    return value


def _float_text(value: str) -> str:
    if not _FLOAT.fullmatch(value):
        raise PydanticCustomError(
            "float_parsing", "Input should be a valid number, unable to parse string as a number"
        )
    return value


def _narrow_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as exc:
        msg = f"value out of range for float32: {value!r}"
        raise ValueError(msg) from exc


_BOOL = TypeAdapter(Annotated[bool, BeforeValidator(_bool_literal)])
_INT64 = IntWidth(64)


@functools.cache
def _int_adapter(width: IntWidth) -> TypeAdapter[int]:
    low, high = width.bounds
    return TypeAdapter(Annotated[int, Field(ge=low, le=high), BeforeValidator(_decimal_text)])


@functools.cache
def _float_adapter(bits: int) -> TypeAdapter[float]:
    if bits == 32:
        return TypeAdapter(
            Annotated[float, BeforeValidator(_float_text), AfterValidator(_narrow_float32)]
        )
    return TypeAdapter(Annotated[float, BeforeValidator(_float_text)])


def coerce(
    annotation: Any,
    raw: str,
    metadata: Mapping[str, str] | None = None,
    *,
    default_layout: str = DEFAULT_LAYOUT,
) -> Any:
    """Convert *raw* into a value of the type described by *annotation*.

    Args:
        annotation: The field's type hint, ``Annotated`` and ``X | None``
            wrappers included.
        raw: Text taken from the request.
        metadata: Directive metadata; only ``layout`` is consulted.
        default_layout: Layout used when ``layout`` is absent or unknown.

    Returns:
        The coerced value, or :data:`UNSUPPORTED` when the type is not one
        of bool, int, float, str, or datetime. An empty *raw* for an
        ``X | None`` bool, int, float or datetime field yields None, so a
        missing parameter clears such a field.
    """
    target, extras = unwrap_annotation(annotation)
    if raw == "" and target in (bool, int, float, datetime) and is_optional(annotation):
        return None

    # bool before int: bool is an int subclass
    if target is bool:
        return _BOOL.validate_python(raw)
    if target is int:
        width = find_marker(extras, IntWidth) or _INT64
        return _int_adapter(width).validate_python(raw)
    if target is float:
        precision = find_marker(extras, FloatWidth)
        return _float_adapter(precision.bits if precision else 64).validate_python(raw)
    if target is str:
        return raw
    if target is datetime:
        layout = (metadata or {}).get(LAYOUT_META)
        return parse_timestamp(raw, layout, default_layout)
    return UNSUPPORTED
