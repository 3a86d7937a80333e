"""Record binder: walks a record's fields and fills them from a request.

Usage::

    @dataclass
    class UpdateUser:
        id: int = bound("url-param=id", default=0)
        dry_run: bool = bound("url-query=dry_run", default=False)
        body: UserPatch | None = bound("request-body", default=None)

    target = UpdateUser()
    bind(request, target)

INVARIANT: a record has at most one ``request-body`` field.
INVARIANT: fields without a directive, or with ``-``, are never touched.

Binding is not transactional: when a field fails, fields bound before it
keep their new values and later fields are left as they were.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from reqbind.binding.defaults import first_value, unmarshal_json
from reqbind.binding.records import FieldBinding, allocate, describe_fields
from reqbind.config.models import BindConfig, Option, apply_options, default_config
from reqbind.domain.coercion import UNSUPPORTED, coerce
from reqbind.domain.directives import SKIP, Directive, DirectiveKind, parse_directive
from reqbind.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

_MISSING = object()


def bind(request: Any, target: Any, *options: Option) -> None:
    """Populate *target*'s directed fields from *request*.

    A missing or empty parameter bound to an ``X | None`` bool, number or
    datetime field sets it to None, whatever its previous value. Use a
    non-optional type to get a parse error instead.

    String annotations of records declared inside a function are resolved
    against the caller's local names.

    Args:
        request: Opaque request object, handed to the configured getters.
        target: Dataclass or pydantic model instance, mutated in place.
        options: Configuration overrides (``with_param_getter`` and friends).

    Raises:
        DirectiveError: a field's directive is malformed.
        ConfigurationError: two body fields, an unknown directive kind, or
            a target that is not a record.
        ValueError: a value failed coercion or the body failed to decode;
            the parser's or decoder's own exception is raised unchanged.
    """
    config = apply_options(default_config(), options)
    frame = inspect.currentframe()
    caller = frame.f_back if frame else None
    try:
        localns = dict(caller.f_locals) if caller else None
    finally:
        del frame, caller
    _RecordWalk(request, target, config, localns).run()


class _RecordWalk:
    """State for a single bind call."""

    def __init__(
        self,
        request: Any,
        target: Any,
        config: BindConfig,
        localns: dict[str, Any] | None = None,
    ) -> None:
        self._request = request
        self._target = target
        self._config = config
        self._localns = localns
        self._query: Any = _MISSING
        self._body_field: str | None = None

    def run(self) -> None:
        table = describe_fields(
            type(self._target),
            directive_key=self._config.directive_key,
            localns=self._localns,
        )
        for field in table:
            if not field.directive or field.directive == SKIP:
                logger.debug("Field %s has no directive; skipped", field.name)
                continue
            directive = parse_directive(field.directive)
            self._dispatch(field, directive)

    def _dispatch(self, field: FieldBinding, directive: Directive) -> None:
        try:
            kind = DirectiveKind(directive.kind)
        except ValueError:
            msg = f"unknown directive kind {directive.kind!r} on field {field.name!r}"
            raise ConfigurationError(msg) from None

        if kind is DirectiveKind.PATH_PARAM:
            raw = self._config.param(self._request, directive.source)
            self._assign(field, raw, directive)
        elif kind is DirectiveKind.QUERY_PARAM:
            raw = first_value(self._query_values(), directive.source)
            self._assign(field, raw, directive)
        else:
            self._decode_body(field)

    def _query_values(self) -> Any:
        if self._query is _MISSING:
            self._query = self._config.query(self._request)
        return self._query

    def _assign(self, field: FieldBinding, raw: str, directive: Directive) -> None:
        value = coerce(
            field.annotation,
            raw,
            directive.metadata,
            default_layout=self._config.default_layout,
        )
        if value is UNSUPPORTED:
            logger.debug("Field %s has an unsupported type; left unchanged", field.name)
            return
        setattr(self._target, field.name, value)

    def _decode_body(self, field: FieldBinding) -> None:
        if self._body_field is not None:
            msg = (
                f"cannot decode the body twice: fields {self._body_field!r} "
                f"and {field.name!r} both bind request-body"
            )
            raise ConfigurationError(msg)
        self._body_field = field.name

        slot = getattr(self._target, field.name, None)
        if slot is None:
            slot = allocate(field.annotation)
        if self._config.unmarshal is unmarshal_json:
            value = unmarshal_json(self._request, slot, field.annotation)
        else:
            decoded = self._config.unmarshal(self._request, slot)
            value = slot if decoded is None else decoded
        setattr(self._target, field.name, value)
        logger.debug("Decoded request body into field %s", field.name)
