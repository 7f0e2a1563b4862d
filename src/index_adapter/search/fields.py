"""
Typed index fields and the field encoder.

A field value is a tagged union over the numeric widths and text the index
store persists with distinct binary encodings:
- INT64: signed 64-bit integer ("long")
- INT32: signed 32-bit integer, wider values wrap
- FLOAT32: IEEE-754 single precision, out of range values saturate to +-inf
- TIMESTAMP: epoch milliseconds, stored as INT64
- TEXT: unicode string

Callers that care about the width build a ``FieldValue`` explicitly. Plain
Python values are inferred by runtime type, first match wins:
datetime/date, int, float, any other number, then text.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum
import math
import numbers
import struct
from typing import Any


_INT32_RANGE = 1 << 32
_INT64_RANGE = 1 << 64


class ValueKind(str, Enum):
    INT64 = "int64"
    INT32 = "int32"
    FLOAT32 = "float32"
    TIMESTAMP = "timestamp"
    TEXT = "text"


class FieldType(str, Enum):
    """Index-level field categories."""

    TEXT = "text"
    KEYWORD = "keyword"
    NUMERIC = "numeric"
    STORED = "stored"


class StorageMode(str, Enum):
    """How a field is kept by the index store."""

    STORED = "stored"  # retrievable, not searchable
    INDEXED = "indexed"  # searchable, not retrievable
    STORED_INDEXED = "stored_indexed"


_PACK_FORMATS = {
    ValueKind.INT64: ">q",
    ValueKind.INT32: ">i",
    ValueKind.FLOAT32: ">f",
    ValueKind.TIMESTAMP: ">q",
}


def _wrap_signed(value: int, span: int) -> int:
    half = span >> 1
    return ((value + half) % span) - half


def to_epoch_millis(value: datetime | date) -> int:
    """Milliseconds since the epoch; naive datetimes and plain dates are taken as UTC."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


@dataclass(frozen=True)
class FieldValue:
    kind: ValueKind
    value: int | float | str

    @classmethod
    def int64(cls, value: int) -> FieldValue:
        return cls(ValueKind.INT64, _wrap_signed(int(value), _INT64_RANGE))

    @classmethod
    def int32(cls, value: Any) -> FieldValue:
        return cls(ValueKind.INT32, _wrap_signed(int(value), _INT32_RANGE))

    @classmethod
    def float32(cls, value: float) -> FieldValue:
        number = float(value)
        try:
            narrowed = struct.unpack(">f", struct.pack(">f", number))[0]
        except OverflowError:
            # beyond single precision range: saturate like a double to float cast
            narrowed = math.copysign(math.inf, number)
        return cls(ValueKind.FLOAT32, narrowed)

    @classmethod
    def timestamp(cls, value: datetime | date | int) -> FieldValue:
        millis = value if isinstance(value, int) else to_epoch_millis(value)
        return cls(ValueKind.TIMESTAMP, millis)

    @classmethod
    def text(cls, value: Any) -> FieldValue:
        return cls(ValueKind.TEXT, value if isinstance(value, str) else str(value))

    @classmethod
    def infer(cls, value: Any) -> FieldValue:
        """Pick the value kind from the runtime type of ``value``."""
        if isinstance(value, FieldValue):
            return value
        if isinstance(value, (datetime, date)):
            return cls.timestamp(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.int64(value)
        if isinstance(value, float):
            return cls.float32(value)
        if isinstance(value, numbers.Number):
            return cls.int32(value)
        return cls.text(value)

    @property
    def is_numeric(self) -> bool:
        return self.kind is not ValueKind.TEXT

    def packed(self) -> bytes:
        """Binary encoding for this value's width."""
        if self.kind is ValueKind.TEXT:
            return str(self.value).encode("utf-8")
        return struct.pack(_PACK_FORMATS[self.kind], self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class IndexableField:
    """A named value with its storage mode.

    ``analyzed`` is only meaningful for text: analyzed text is segmented into
    full-text terms, unanalyzed text is indexed as one atomic token.
    """

    name: str
    value: FieldValue
    mode: StorageMode
    analyzed: bool = False

    @property
    def stored(self) -> bool:
        return self.mode is not StorageMode.INDEXED

    @property
    def indexed(self) -> bool:
        return self.mode is not StorageMode.STORED

    @property
    def field_type(self) -> FieldType:
        if not self.indexed:
            return FieldType.STORED
        if self.value.is_numeric:
            return FieldType.NUMERIC
        return FieldType.TEXT if self.analyzed else FieldType.KEYWORD

    def string_value(self) -> str:
        return str(self.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.field_type.value,
            "kind": self.value.kind.value,
            "value": self.value.value,
            "stored": self.stored,
            "indexed": self.indexed,
            "analyzed": self.analyzed,
        }


def encode_field(name: str, value: Any, store: bool) -> IndexableField:
    """Encode ``value`` as a searchable field, also retrievable when ``store`` is set.

    Text values are kept as a single exact-match token.
    """
    mode = StorageMode.STORED_INDEXED if store else StorageMode.INDEXED
    return IndexableField(name=name, value=FieldValue.infer(value), mode=mode)


def text_field(name: str, value: Any) -> IndexableField:
    """Full-text field that is searchable but not stored."""
    return IndexableField(name=name, value=FieldValue.text(value), mode=StorageMode.INDEXED, analyzed=True)


def stored_field(name: str, value: Any) -> IndexableField:
    """Field kept for retrieval only."""
    return IndexableField(name=name, value=FieldValue.infer(value), mode=StorageMode.STORED)
