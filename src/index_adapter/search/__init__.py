"""Document mapping, keyword segmentation and highlighting."""

from index_adapter.search.document import (
    CLASS_FIELD,
    ID_FIELD,
    Document,
    DocumentBuilder,
    DocumentMapper,
    MappingResult,
    Searchable,
    SkippedField,
    docclass,
    docid,
)
from index_adapter.search.fields import (
    FieldType,
    FieldValue,
    IndexableField,
    StorageMode,
    ValueKind,
    encode_field,
    stored_field,
    text_field,
)
from index_adapter.search.highlighter import HighlightResult, Highlighter
from index_adapter.search.query import TermQuery, escape_query
from index_adapter.search.segmenter import KeywordSegmenter, SegmentResult
from index_adapter.search.stopwords import StopwordSet, load_stopwords
from index_adapter.search.tokenizer import JiebaTokenizer, Token, Tokenizer, TokenizeMode


__all__ = [
    "CLASS_FIELD",
    "ID_FIELD",
    "Document",
    "DocumentBuilder",
    "DocumentMapper",
    "FieldType",
    "FieldValue",
    "HighlightResult",
    "Highlighter",
    "IndexableField",
    "JiebaTokenizer",
    "KeywordSegmenter",
    "MappingResult",
    "Searchable",
    "SegmentResult",
    "SkippedField",
    "StopwordSet",
    "StorageMode",
    "TermQuery",
    "Token",
    "TokenizeMode",
    "Tokenizer",
    "ValueKind",
    "docclass",
    "docid",
    "encode_field",
    "escape_query",
    "load_stopwords",
    "stored_field",
    "text_field",
]
