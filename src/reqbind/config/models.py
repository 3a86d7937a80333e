"""Bind configuration: the request capabilities a bind call uses.

The process-wide default is built once from settings and never mutated.
Options are pure functions returning a modified copy, so concurrent
``bind()`` calls never share configuration state::

    bind(request, target, with_param_getter(lambda r, key: r.match_info[key]))
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from reqbind.binding import defaults
from reqbind.binding.records import DIRECTIVE_KEY
from reqbind.domain.layouts import DEFAULT_LAYOUT

ParamGetter = Callable[[Any, str], str]
QueryGetter = Callable[[Any], Mapping[str, Sequence[str]]]
Unmarshaller = Callable[[Any, Any], Any]


class BindConfig(BaseModel):
    """Capabilities and defaults for one bind call.

    Attributes:
        param: ``(request, key) -> str`` path parameter getter.
        query: ``request -> multimap`` query parameter getter.
        unmarshal: ``(request, target) -> None`` body decoder populating
            *target* in place. A non-None return value replaces the target.
            The built-in JSON decoder also receives the field's declared
            type, so list and scalar bodies validate against it.
        directive_key: Dataclass field metadata key holding directives.
        default_layout: Timestamp layout used when none is named.
    """

    model_config = {"frozen": True}

    param: ParamGetter = defaults.path_param
    query: QueryGetter = defaults.query_params
    unmarshal: Unmarshaller = defaults.unmarshal_json
    directive_key: str = DIRECTIVE_KEY
    default_layout: str = DEFAULT_LAYOUT


Option = Callable[[BindConfig], BindConfig]


@functools.cache
def default_config() -> BindConfig:
    """The process-wide default configuration, built from settings once."""
    from reqbind.config.settings import get_settings

    settings = get_settings()
    return BindConfig(
        directive_key=settings.directive_key,
        default_layout=settings.default_layout,
    )


def apply_options(base: BindConfig, options: Sequence[Option]) -> BindConfig:
    """Fold *options* over *base*, left to right."""
    config = base
    for option in options:
        config = option(config)
    return config


def with_param_getter(getter: ParamGetter) -> Option:
    """Override how path parameters are read."""
    return lambda config: config.model_copy(update={"param": getter})


def with_query_getter(getter: QueryGetter) -> Option:
    """Override how the query multimap is read."""
    return lambda config: config.model_copy(update={"query": getter})


def with_unmarshaller(unmarshal: Unmarshaller) -> Option:
    """Override how the request body is decoded."""
    return lambda config: config.model_copy(update={"unmarshal": unmarshal})


def with_directive_key(key: str) -> Option:
    """Read directives from a different dataclass metadata key."""
    return lambda config: config.model_copy(update={"directive_key": key})


def with_default_layout(name: str) -> Option:
    """Use *name* when a timestamp field names no layout."""
    return lambda config: config.model_copy(update={"default_layout": name})
