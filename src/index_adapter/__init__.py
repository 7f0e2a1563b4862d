"""Adapter between domain objects and a full-text index store."""

from index_adapter.config import Settings, get_settings
from index_adapter.errors import ErrorKind, IndexAdapterError
from index_adapter.search import (
    Document,
    DocumentMapper,
    FieldValue,
    Highlighter,
    JiebaTokenizer,
    KeywordSegmenter,
    Searchable,
    StopwordSet,
    docclass,
    docid,
    encode_field,
)
from index_adapter.toolkit import SearchToolkit


__all__ = [
    "Document",
    "DocumentMapper",
    "ErrorKind",
    "FieldValue",
    "Highlighter",
    "IndexAdapterError",
    "JiebaTokenizer",
    "KeywordSegmenter",
    "SearchToolkit",
    "Searchable",
    "Settings",
    "StopwordSet",
    "docclass",
    "docid",
    "encode_field",
    "get_settings",
]
