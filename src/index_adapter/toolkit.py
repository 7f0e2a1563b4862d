"""Composition root wiring shared read-only resources into each component."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from index_adapter.config import Settings
from index_adapter.observability.logging import configure_logging
from index_adapter.search.document import Document, DocumentMapper, FieldReader, Searchable, docid
from index_adapter.search.highlighter import Highlighter
from index_adapter.search.segmenter import KeywordSegmenter
from index_adapter.search.stopwords import StopwordSet
from index_adapter.search.tokenizer import JiebaTokenizer, Tokenizer


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchToolkit:
    """One stopword set and one tokenizer, shared by every component.

    Build it once at process start and hand it to whatever needs to index,
    segment or highlight. Nothing in it is mutated afterwards.
    """

    tokenizer: Tokenizer
    stopwords: StopwordSet
    segmenter: KeywordSegmenter
    mapper: DocumentMapper
    highlighter: Highlighter

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        tokenizer: Tokenizer | None = None,
        stopwords: StopwordSet | None = None,
        reader: FieldReader | None = None,
        setup_logging: bool = False,
    ) -> SearchToolkit:
        """Build every component from ``settings``.

        With ``setup_logging`` the root logger is configured from
        ``settings.log_level`` and ``settings.log_json`` first. Embedding
        applications that own their logging leave it off.
        """
        settings = settings or Settings()
        if setup_logging:
            cls.configure_logging(settings)
        if tokenizer is None:
            tokenizer = JiebaTokenizer(
                dictionary=settings.jieba_dictionary,
                user_dict=settings.jieba_user_dict,
                hmm=settings.jieba_hmm,
            )
        if stopwords is None:
            stopwords = StopwordSet.load(settings.stopword_path)
        logger.info(
            "Search toolkit ready: %d stopwords from %s, fragment size %d",
            len(stopwords),
            stopwords.source,
            settings.highlight_fragment_size,
        )
        return cls(
            tokenizer=tokenizer,
            stopwords=stopwords,
            segmenter=KeywordSegmenter(tokenizer, stopwords, min_length=settings.min_keyword_length),
            mapper=DocumentMapper(reader=reader),
            highlighter=Highlighter(
                tokenizer,
                fragment_size=settings.highlight_fragment_size,
                pre_tag=settings.highlight_pre_tag,
                post_tag=settings.highlight_post_tag,
            ),
        )

    @staticmethod
    def configure_logging(settings: Settings) -> None:
        configure_logging(settings.log_level, json_output=settings.log_json)

    def segment(self, text: str | None) -> list[str]:
        return self.segmenter.segment(text)

    def highlight(self, text: str | None, key: str | None) -> str | None:
        return self.highlighter.highlight(text, key)

    def to_document(self, obj: Searchable | None) -> Document | None:
        return self.mapper.map(obj)

    @staticmethod
    def docid(doc: Document) -> int:
        return docid(doc)
