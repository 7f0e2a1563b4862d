"""Error kinds and exceptions raised at the adapter boundaries.

Nothing in this package is fatal to its caller. Each boundary catches the
matching exception, logs it, counts it, and reports the ``ErrorKind`` on its
result object instead of propagating.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Degradation categories reported by results and metrics."""

    CONFIG_LOAD = "config_load"
    TOKENIZATION = "tokenization"
    PROPERTY_READ = "property_read"
    QUERY_SYNTAX = "query_syntax"
    DUPLICATE_FIELD = "duplicate_field"
    VALUE_ENCODING = "value_encoding"


class IndexAdapterError(Exception):
    """Base class for all adapter errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StopwordLoadError(IndexAdapterError):
    kind = ErrorKind.CONFIG_LOAD


class TokenizationError(IndexAdapterError):
    kind = ErrorKind.TOKENIZATION


class PropertyReadError(IndexAdapterError):
    """A named property could not be read from a domain object."""

    kind = ErrorKind.PROPERTY_READ

    def __init__(self, message: str, *, field_name: str) -> None:
        super().__init__(message)
        self.field_name = field_name


class QuerySyntaxError(IndexAdapterError):
    kind = ErrorKind.QUERY_SYNTAX


class DuplicateFieldError(IndexAdapterError):
    """A document already holds a field with the same name."""

    kind = ErrorKind.DUPLICATE_FIELD

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Field '{field_name}' already present in document")
        self.field_name = field_name


class FieldEncodingError(IndexAdapterError):
    """A property value has no encoding in its field's value kind."""

    kind = ErrorKind.VALUE_ENCODING

    def __init__(self, message: str, *, field_name: str) -> None:
        super().__init__(message)
        self.field_name = field_name
