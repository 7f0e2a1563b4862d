"""Keyword segmentation for user search input."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from index_adapter.errors import ErrorKind, TokenizationError
from index_adapter.observability.metrics import record_degradation, track_latency
from index_adapter.observability.tracing import create_span
from index_adapter.search.stopwords import StopwordSet
from index_adapter.search.tokenizer import Tokenizer, TokenizeMode


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentResult:
    """Accepted keywords in tokenizer order, plus the error that cut them short, if any."""

    keywords: tuple[str, ...]
    error: ErrorKind | None = None

    @property
    def complete(self) -> bool:
        return self.error is None


def is_numeric_token(term: str) -> bool:
    """True for digit runs, ignoring decimal points ("2", "3.14", "1.2.3", ".")."""
    digits = term.replace(".", "")
    return not digits or digits.isdecimal()


class KeywordSegmenter:
    """Turns free text into filtered search keywords.

    Tokens come from the tokenizer's search mode. A token is dropped when it
    is shorter than ``min_length``, when it is numeric once decimal points
    are removed, or when its lowercase form is a stopword.
    """

    def __init__(self, tokenizer: Tokenizer, stopwords: StopwordSet, *, min_length: int = 2) -> None:
        self.tokenizer = tokenizer
        self.stopwords = stopwords
        self.min_length = min_length

    def accepts(self, term: str) -> bool:
        if len(term) < self.min_length:
            return False
        if is_numeric_token(term):
            return False
        return term not in self.stopwords

    def segment_result(self, text: str | None) -> SegmentResult:
        if text is None or not text.strip():
            return SegmentResult(keywords=())

        keywords: list[str] = []
        with create_span("index_adapter.segment", attributes={"text.length": len(text)}), track_latency("segment"):
            try:
                for token in self.tokenizer.tokenize(text, TokenizeMode.SEARCH):
                    if self.accepts(token.text):
                        keywords.append(token.text)
            except TokenizationError as exc:
                logger.error("Unable to split keywords: %s", exc.message, exc_info=exc)
                record_degradation("segment", exc.kind)
                return SegmentResult(keywords=tuple(keywords), error=exc.kind)
            except Exception as exc:
                logger.error("Unable to split keywords: %s", exc, exc_info=exc)
                record_degradation("segment", ErrorKind.TOKENIZATION)
                return SegmentResult(keywords=tuple(keywords), error=ErrorKind.TOKENIZATION)
        return SegmentResult(keywords=tuple(keywords))

    def segment(self, text: str | None) -> list[str]:
        """Return the keywords of ``text``; partial on tokenizer failure, empty for blank input."""
        return list(self.segment_result(text).keywords)
