"""
Mapping of domain objects to index documents.

Every document starts with two stored reserved fields: the object's id and
its class tag (``module.QualName``), which together let a search hit be
routed back to the right loader. They are followed by, in order, the
object's store fields, index fields, extra stored data and extra indexed
data.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
import logging
from typing import Any

from index_adapter.errors import (
    DuplicateFieldError,
    ErrorKind,
    FieldEncodingError,
    IndexAdapterError,
    PropertyReadError,
)
from index_adapter.observability.metrics import record_degradation, track_latency
from index_adapter.observability.tracing import create_span
from index_adapter.search.fields import FieldValue, IndexableField, encode_field, stored_field, text_field


logger = logging.getLogger(__name__)

ID_FIELD = "___id"
CLASS_FIELD = "___class"
RESERVED_FIELDS = frozenset({ID_FIELD, CLASS_FIELD})

FieldReader = Callable[[Any, str], Any]


class Searchable(ABC):
    """Capability interface for objects that can be indexed.

    Only ``id`` is required. Field name lists are read through
    ``read_field``, which defaults to plain attribute access.
    """

    @abstractmethod
    def id(self) -> int:
        """Stable unique identifier."""

    def store_fields(self) -> Sequence[str] | None:
        return None

    def index_fields(self) -> Sequence[str] | None:
        return None

    def extend_store_datas(self) -> Mapping[str, Any] | None:
        return None

    def extend_index_datas(self) -> Mapping[str, Any] | None:
        return None

    def read_field(self, name: str) -> Any:
        return read_attribute(self, name)


def read_attribute(obj: Any, name: str) -> Any:
    """Read ``name`` from ``obj`` as a property, raising PropertyReadError on failure."""
    try:
        return getattr(obj, name)
    except Exception as exc:
        raise PropertyReadError(
            f"Unable to get property '{name}' of {type(obj).__name__}: {exc}", field_name=name
        ) from exc


def class_tag(obj: Any) -> str:
    cls = type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


def _stored_field(name: str, value: Any) -> IndexableField:
    return encode_field(name, value, True)


def _encode(make_field: Callable[[str, Any], IndexableField], name: str, value: Any) -> IndexableField:
    try:
        return make_field(name, value)
    except (OverflowError, TypeError, ValueError) as exc:
        raise FieldEncodingError(f"Unable to encode value of field '{name}': {exc}", field_name=name) from exc


def _claim(by_name: dict[str, IndexableField], item: IndexableField) -> None:
    # insertion order of by_name is the document field order
    if item.name in by_name:
        raise DuplicateFieldError(item.name)
    by_name[item.name] = item


class Document:
    """Immutable, ordered collection of uniquely named fields."""

    __slots__ = ("_fields", "_by_name")

    def __init__(self, fields: Sequence[IndexableField]) -> None:
        by_name: dict[str, IndexableField] = {}
        for item in fields:
            _claim(by_name, item)
        self._fields = tuple(by_name.values())
        self._by_name = by_name

    @classmethod
    def _from_claimed(cls, by_name: dict[str, IndexableField]) -> Document:
        doc = cls.__new__(cls)
        doc._fields = tuple(by_name.values())
        doc._by_name = dict(by_name)
        return doc

    def __iter__(self) -> Iterator[IndexableField]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"Document(fields={list(self.names)!r})"

    @property
    def fields(self) -> tuple[IndexableField, ...]:
        return self._fields

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self._fields)

    def field(self, name: str) -> IndexableField | None:
        return self._by_name.get(name)

    def get(self, name: str) -> str | None:
        """String form of a stored field, None when absent or not stored."""
        item = self._by_name.get(name)
        if item is None or not item.stored:
            return None
        return item.string_value()

    def to_dict(self) -> dict[str, Any]:
        return {"fields": [item.to_dict() for item in self._fields]}


class DocumentBuilder:
    """Accumulates fields in order, rejecting duplicate names."""

    def __init__(self) -> None:
        self._by_name: dict[str, IndexableField] = {}

    def add(self, item: IndexableField) -> None:
        _claim(self._by_name, item)

    def build(self) -> Document:
        return Document._from_claimed(self._by_name)


@dataclass(frozen=True)
class SkippedField:
    name: str
    kind: ErrorKind
    reason: str


@dataclass(frozen=True)
class MappingResult:
    document: Document | None
    skipped: tuple[SkippedField, ...] = field(default_factory=tuple)


class DocumentMapper:
    """Builds documents from :class:`Searchable` objects.

    Mapping is best effort: a property that cannot be read, holds None, or
    reuses an existing field name is logged and left out while the rest of
    the document is still built.

    Args:
        reader: Optional ``(obj, name) -> value`` extraction function used
            instead of the object's own ``read_field``.
    """

    def __init__(self, reader: FieldReader | None = None) -> None:
        self.reader = reader

    def map(self, obj: Searchable | None) -> Document | None:
        return self.map_with_report(obj).document

    def map_with_report(self, obj: Searchable | None) -> MappingResult:
        if obj is None:
            return MappingResult(document=None)

        with create_span("index_adapter.map", attributes={"document.class": class_tag(obj)}), track_latency("map"):
            builder = DocumentBuilder()
            skipped: list[SkippedField] = []
            builder.add(stored_field(ID_FIELD, FieldValue.int64(obj.id())))
            builder.add(stored_field(CLASS_FIELD, FieldValue.text(class_tag(obj))))

            for name in obj.store_fields() or ():
                self._add_property(builder, skipped, obj, name, _stored_field)

            for name in obj.index_fields() or ():
                self._add_property(builder, skipped, obj, name, text_field)

            for name, value in (obj.extend_store_datas() or {}).items():
                self._add_value(builder, skipped, obj, name, value, _stored_field)

            for name, value in (obj.extend_index_datas() or {}).items():
                self._add_value(builder, skipped, obj, name, value, text_field)

            return MappingResult(document=builder.build(), skipped=tuple(skipped))

    def _read(self, obj: Searchable, name: str) -> Any:
        if self.reader is not None:
            try:
                return self.reader(obj, name)
            except PropertyReadError:
                raise
            except Exception as exc:
                raise PropertyReadError(
                    f"Unable to get property '{name}' of {type(obj).__name__}: {exc}", field_name=name
                ) from exc
        return obj.read_field(name)

    def _add_property(
        self,
        builder: DocumentBuilder,
        skipped: list[SkippedField],
        obj: Searchable,
        name: str,
        make_field: Callable[[str, Any], IndexableField],
    ) -> None:
        try:
            value = self._read(obj, name)
        except PropertyReadError as exc:
            self._skip(skipped, obj, name, exc)
            return
        self._add_value(builder, skipped, obj, name, value, make_field)

    def _add_value(
        self,
        builder: DocumentBuilder,
        skipped: list[SkippedField],
        obj: Searchable,
        name: str,
        value: Any,
        make_field: Callable[[str, Any], IndexableField],
    ) -> None:
        if value is None:
            logger.warning("Skipping field '%s' of %s: value is None", name, type(obj).__name__)
            skipped.append(SkippedField(name=name, kind=ErrorKind.PROPERTY_READ, reason="value is None"))
            return
        try:
            builder.add(_encode(make_field, name, value))
        except (FieldEncodingError, DuplicateFieldError) as exc:
            self._skip(skipped, obj, name, exc)

    def _skip(self, skipped: list[SkippedField], obj: Searchable, name: str, exc: IndexAdapterError) -> None:
        logger.error(
            "Skipping field '%s' of %s: %s",
            name,
            type(obj).__name__,
            exc.message,
            exc_info=exc if exc.__cause__ is not None else None,
        )
        record_degradation("map", exc.kind)
        skipped.append(SkippedField(name=name, kind=exc.kind, reason=exc.message))


def docid(doc: Document) -> int:
    """Object id stored in ``doc``, or 0 when missing or unparseable."""
    value = doc.get(ID_FIELD)
    if value is None:
        return 0
    try:
        return int(value)
    except ValueError:
        return 0


def docclass(doc: Document) -> str | None:
    """Class tag stored in ``doc``."""
    return doc.get(CLASS_FIELD)
