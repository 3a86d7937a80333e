"""Exception hierarchy for directive parsing and record binding.

Data errors (coercion, body decoding) are never wrapped: they surface as
the exception the underlying parser or decoder raised.
"""

from __future__ import annotations


class BindingError(Exception):
    """Base class for errors raised by reqbind itself."""


class DirectiveError(BindingError, ValueError):
    """A field directive does not follow the directive grammar."""

    def __init__(self, message: str, directive: str) -> None:
        super().__init__(f"{message}: {directive!r}")
        self.directive = directive


class InvalidDirectiveError(DirectiveError):
    """The directive is empty or its first segment is blank."""

    def __init__(self, directive: str) -> None:
        super().__init__("invalid directive", directive)


class InvalidKeyValueError(DirectiveError):
    """A ``key=value`` segment does not split into two non-empty parts."""

    def __init__(self, directive: str) -> None:
        super().__init__("invalid directive key-value pair", directive)


class ConfigurationError(BindingError):
    """The caller's record or configuration cannot be bound.

    Raised for programming mistakes rather than bad request data: two
    body fields on one record, an unknown directive kind, a target that
    is not a record.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
