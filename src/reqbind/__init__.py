"""reqbind: declarative binding of request values into typed records."""

from __future__ import annotations

from reqbind.binding.binder import bind
from reqbind.binding.records import FieldBinding, bound, describe_fields
from reqbind.config.models import (
    BindConfig,
    Option,
    with_default_layout,
    with_directive_key,
    with_param_getter,
    with_query_getter,
    with_unmarshaller,
)
from reqbind.domain.coercion import UNSUPPORTED, coerce
from reqbind.domain.directives import Directive, DirectiveKind, parse_directive
from reqbind.domain.errors import (
    BindingError,
    ConfigurationError,
    DirectiveError,
    InvalidDirectiveError,
    InvalidKeyValueError,
)
from reqbind.domain.types import (
    Float32,
    Float64,
    From,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)

__version__ = "0.1.0"

__all__ = [
    "UNSUPPORTED",
    "BindConfig",
    "BindingError",
    "ConfigurationError",
    "Directive",
    "DirectiveError",
    "DirectiveKind",
    "FieldBinding",
    "Float32",
    "Float64",
    "From",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "InvalidDirectiveError",
    "InvalidKeyValueError",
    "Option",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "bind",
    "bound",
    "coerce",
    "describe_fields",
    "parse_directive",
    "with_default_layout",
    "with_directive_key",
    "with_param_getter",
    "with_query_getter",
    "with_unmarshaller",
]
