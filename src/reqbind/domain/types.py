"""Field type markers and annotation helpers.

Python integers and floats carry no storage width, so fixed-width
fields are declared with ``Annotated`` markers::

    @dataclass
    class Query:
        page: Annotated[UInt16, From("url-query=page")] = 0
        ratio: Float32 = bound("url-query=ratio", default=0.0)
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any, Union, get_args, get_origin


@dataclass(frozen=True)
class From:
    """Binding directive attached to a field through ``Annotated``."""

    directive: str


@dataclass(frozen=True)
class IntWidth:
    """Bit width and signedness of an integer field."""

    bits: int
    signed: bool = True

    @property
    def bounds(self) -> tuple[int, int]:
        if self.signed:
            return -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        return 0, (1 << self.bits) - 1


@dataclass(frozen=True)
class FloatWidth:
    """Precision of a floating point field (32 or 64 bits)."""

    bits: int


Int8 = Annotated[int, IntWidth(8)]
Int16 = Annotated[int, IntWidth(16)]
Int32 = Annotated[int, IntWidth(32)]
Int64 = Annotated[int, IntWidth(64)]
UInt = Annotated[int, IntWidth(64, signed=False)]
UInt8 = Annotated[int, IntWidth(8, signed=False)]
UInt16 = Annotated[int, IntWidth(16, signed=False)]
UInt32 = Annotated[int, IntWidth(32, signed=False)]
UInt64 = Annotated[int, IntWidth(64, signed=False)]
Float32 = Annotated[float, FloatWidth(32)]
Float64 = Annotated[float, FloatWidth(64)]

# Names accepted wherever a field type is given as text (CLI, services).
TYPE_NAMES: dict[str, Any] = {
    "bool": bool,
    "int": int,
    "int8": Int8,
    "int16": Int16,
    "int32": Int32,
    "int64": Int64,
    "uint": UInt,
    "uint8": UInt8,
    "uint16": UInt16,
    "uint32": UInt32,
    "uint64": UInt64,
    "float": float,
    "float32": Float32,
    "float64": Float64,
    "str": str,
    "datetime": datetime,
}


def unwrap_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip ``Annotated`` and ``X | None`` wrappers from *annotation*.

    Returns the bare type and every ``Annotated`` extra found on the way,
    outermost first.

    Examples:
        >>> unwrap_annotation(Annotated[int, "a"] | None)
        (<class 'int'>, ('a',))
    """
    extras: list[Any] = []
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation, *found = get_args(annotation)
            extras.extend(found)
        elif origin is Union or origin is types.UnionType:
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) != 1:
                return annotation, tuple(extras)
            annotation = members[0]
        else:
            return annotation, tuple(extras)


def is_optional(annotation: Any) -> bool:
    """Whether *annotation* admits None (``X | None``, possibly inside ``Annotated``)."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(annotation)
    return annotation is None or annotation is type(None)


def find_marker(extras: tuple[Any, ...], marker_type: type[Any]) -> Any | None:
    """Return the first extra that is an instance of *marker_type*."""
    for extra in extras:
        if isinstance(extra, marker_type):
            return extra
    return None
