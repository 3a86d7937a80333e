"""Built-in request capabilities used when the caller supplies none.

They read the attributes most Python request objects share: a
``path_params`` mapping, a ``query_params`` multimap, and a ``body``
holding the raw payload (bytes, text, a file-like object, or a
synchronous callable returning either).
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import from_json

from reqbind.binding.records import field_names, is_record
from reqbind.domain.errors import ConfigurationError
from reqbind.domain.types import unwrap_annotation

logger = logging.getLogger(__name__)


def path_param(request: Any, key: str) -> str:
    """Return the path parameter *key*, or an empty string."""
    params = getattr(request, "path_params", None) or {}
    value = params.get(key, "")
    return value if isinstance(value, str) else str(value)


def query_params(request: Any) -> Mapping[str, Sequence[str]]:
    """Return the request's query multimap, or an empty mapping."""
    return getattr(request, "query_params", None) or {}


def first_value(values: Any, key: str) -> str:
    """First value stored under *key* in a query multimap.

    Works with plain ``dict[str, list[str]]`` maps (as produced by
    ``urllib.parse.parse_qs``) and with multidicts exposing ``getlist``.
    Later values are ignored; a missing key yields an empty string.
    """
    getlist = getattr(values, "getlist", None)
    items = getlist(key) if callable(getlist) else values.get(key, ())
    if isinstance(items, str):
        return items
    return items[0] if items else ""


def read_body(request: Any) -> bytes | str:
    """Return the raw request payload.

    Raises:
        ConfigurationError: the request only offers an asynchronous body.
    """
    body = getattr(request, "body", b"")
    if hasattr(body, "read"):
        body = body.read()
    elif callable(body):
        body = body()
    if inspect.isawaitable(body):
        if inspect.iscoroutine(body):
            body.close()
        msg = "request body is only available asynchronously; supply an unmarshaller"
        raise ConfigurationError(msg)
    return body if body is not None else b""


def unmarshal_json(request: Any, target: Any, annotation: Any = None) -> Any:
    """Decode the JSON request body into *target*, validated as *annotation*.

    *annotation* is the body field's declared type and defaults to the
    type of *target*. Mappings are updated and lists replaced in place,
    their items validated against the declared type, so a ``list[Item]``
    field receives ``Item`` instances. Dataclasses and pydantic models are
    validated over their current values overlaid with the decoded object,
    so keys missing from the body keep the values the target already had.
    Any other type is decoded as a fresh value.

    Returns:
        *target* when it was filled in place, otherwise the decoded value.

    Raises:
        ValueError: the body is not valid JSON, or does not validate
            against the declared type (``pydantic.ValidationError``).
    """
    # an unresolved forward reference arrives as a string
    declared = type(target) if annotation is None or isinstance(annotation, str) else annotation
    base, _ = unwrap_annotation(declared)
    raw = read_body(request)

    if isinstance(target, MutableMapping):
        target.update(TypeAdapter(base).validate_json(raw))
        return target
    if isinstance(target, MutableSequence):
        target[:] = TypeAdapter(base).validate_json(raw)
        return target
    if not is_record(type(target)):
        return TypeAdapter(declared).validate_json(raw)

    record_type = type(target)
    payload = from_json(raw)
    if not isinstance(payload, dict):
        msg = f"cannot decode JSON {type(payload).__name__} into {record_type.__name__}"
        raise ValueError(msg)

    names = field_names(record_type)
    current = {name: getattr(target, name) for name in names if hasattr(target, name)}
    decoded = TypeAdapter(record_type).validate_python({**current, **payload})
    for name in names:
        setattr(target, name, getattr(decoded, name))
    logger.debug("Decoded %d body keys into %s", len(payload), record_type.__name__)
    return target
