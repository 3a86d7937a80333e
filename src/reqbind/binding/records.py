"""Record field tables: which fields a record exposes and their directives.

A record is a dataclass, a pydantic model, or any class implementing the
``describe_fields()`` classmethod. Directives are read from dataclass field
metadata (``field(metadata={"from": ...})``) or from a :class:`From` marker
inside the field's ``Annotated`` hint.

Fields come back in declaration order with base-class fields first, the
same order ``dataclasses.fields()`` and ``model_fields`` use. Tables are
rebuilt on every call; nothing is cached per record type.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel

from reqbind.domain.errors import ConfigurationError
from reqbind.domain.types import From, find_marker, unwrap_annotation

logger = logging.getLogger(__name__)

DIRECTIVE_KEY = "from"


@dataclass(frozen=True)
class FieldBinding:
    """One row of a record's binding table.

    Attributes:
        name: Attribute name on the record instance.
        annotation: Full type hint, ``Annotated`` extras included.
        directive: Raw directive string, or None when the field has none.
    """

    name: str
    annotation: Any
    directive: str | None = None


def bound(directive: str, **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a binding directive.

    Accepts the usual :func:`dataclasses.field` keyword arguments::

        @dataclass
        class GetUser:
            id: int = bound("url-param=id", default=0)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[DIRECTIVE_KEY] = directive
    return dataclasses.field(metadata=metadata, **kwargs)


def is_record(record_type: type[Any]) -> bool:
    """Whether *record_type* can be walked by the binder."""
    return (
        callable(getattr(record_type, "describe_fields", None))
        or dataclasses.is_dataclass(record_type)
        or (isinstance(record_type, type) and issubclass(record_type, BaseModel))
    )


def field_names(record_type: type[Any]) -> list[str]:
    """Attribute names of a dataclass or pydantic model, in declaration order."""
    if dataclasses.is_dataclass(record_type):
        return [f.name for f in dataclasses.fields(record_type)]
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return list(record_type.model_fields)
    msg = f"{record_type.__name__} is neither a dataclass nor a pydantic model"
    raise ConfigurationError(msg)


def describe_fields(
    record_type: type[Any],
    *,
    directive_key: str = DIRECTIVE_KEY,
    localns: Mapping[str, Any] | None = None,
) -> list[FieldBinding]:
    """Build the binding table for *record_type*.

    String annotations are resolved against the record's module, then
    *localns*, then the class body. An annotation naming a class that is
    visible in none of them stays a string; such a field binds nothing.

    Raises:
        ConfigurationError: *record_type* is not a record.
    """
    hook = getattr(record_type, "describe_fields", None)
    if callable(hook):
        return list(hook())

    if not is_record(record_type):
        msg = f"cannot bind into {record_type.__name__}: not a dataclass or pydantic model"
        raise ConfigurationError(msg)

    table: list[FieldBinding] = []
    if dataclasses.is_dataclass(record_type):
        hints = _type_hints(record_type, localns)
        for f in dataclasses.fields(record_type):
            annotation = hints.get(f.name, f.type)
            directive = f.metadata.get(directive_key)
            if directive is None:
                directive = _annotated_directive(annotation)
            table.append(FieldBinding(f.name, annotation, directive))
        return table

    # pydantic moves Annotated extras into FieldInfo.metadata
    for name, info in record_type.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        directive = _annotated_directive(annotation)
        if directive is None and isinstance(info.json_schema_extra, dict):
            extra = info.json_schema_extra.get(directive_key)
            directive = extra if isinstance(extra, str) else None
        table.append(FieldBinding(name, annotation, directive))
    return table


def _type_hints(record_type: type[Any], localns: Mapping[str, Any] | None) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type, localns=localns, include_extras=True)
    except NameError:
        logger.debug("Resolving %s annotations field by field", record_type.__name__)

    # a class defined inside a function cannot see its sibling locals
    hints: dict[str, Any] = {}
    for base in reversed(record_type.__mro__):
        module = sys.modules.get(base.__module__)
        namespace = {**(vars(module) if module else {}), **(localns or {}), **vars(base)}
        for name, value in inspect.get_annotations(base).items():
            if not isinstance(value, str):
                hints[name] = value
                continue
            try:
                hints[name] = eval(value, namespace)
            except NameError:
                logger.debug("Annotation %r of %s.%s is unresolved", value, base.__name__, name)
                hints[name] = value
    return hints


def _annotated_directive(annotation: Any) -> str | None:
    _, extras = unwrap_annotation(annotation)
    marker = find_marker(extras, From)
    return marker.directive if marker else None


def allocate(annotation: Any) -> Any:
    """Create a zero-valued instance of the type behind *annotation*.

    Used for body fields whose slot is still None.

    Raises:
        ConfigurationError: the type cannot be built without arguments.
    """
    target, _ = unwrap_annotation(annotation)
    if isinstance(target, str):
        msg = f"cannot allocate the body: annotation {target!r} could not be resolved"
        raise ConfigurationError(msg)
    if isinstance(target, type) and issubclass(target, BaseModel):
        return target.model_construct()
    try:
        return target()
    except TypeError as exc:
        msg = f"cannot allocate an empty {getattr(target, '__name__', target)!s} for the body"
        raise ConfigurationError(msg) from exc
