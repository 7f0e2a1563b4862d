"""Process-wide stopword set loaded once from a line-oriented dictionary."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from importlib import resources
import logging
from pathlib import Path

from index_adapter.errors import ErrorKind, StopwordLoadError
from index_adapter.observability.metrics import record_degradation


logger = logging.getLogger(__name__)

PACKAGED_DICTIONARY = "stopword.dic"


@dataclass(frozen=True)
class StopwordSet:
    """Immutable, case-insensitive set of stopwords.

    ``error`` is set when the dictionary could not be read; the set is then
    empty and keyword extraction simply filters fewer words.
    """

    words: frozenset[str]
    source: str
    error: ErrorKind | None = None

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self.words

    def __len__(self) -> int:
        return len(self.words)

    @classmethod
    def from_words(cls, words: Iterable[str], source: str = "<memory>") -> StopwordSet:
        return cls(words=_normalize(words), source=source)

    @classmethod
    def empty(cls) -> StopwordSet:
        return cls(words=frozenset(), source="<empty>")

    @classmethod
    def load(cls, path: Path | None = None) -> StopwordSet:
        """Load the dictionary at ``path``, or the packaged one when omitted."""
        source = str(path) if path is not None else f"index_adapter.resources/{PACKAGED_DICTIONARY}"
        try:
            lines = _read_lines(path)
        except StopwordLoadError as exc:
            logger.error("Unable to read stopword file %s: %s", source, exc.message, exc_info=exc.__cause__)
            record_degradation("stopwords", exc.kind)
            return cls(words=frozenset(), source=source, error=exc.kind)
        stopwords = cls(words=_normalize(lines), source=source)
        logger.debug("Loaded %d stopwords from %s", len(stopwords), source)
        return stopwords


def _read_lines(path: Path | None) -> list[str]:
    source = Path(path) if path is not None else resources.files("index_adapter.resources") / PACKAGED_DICTIONARY
    try:
        text = source.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise StopwordLoadError(str(exc)) from exc
    return text.splitlines()


def _normalize(words: Iterable[str]) -> frozenset[str]:
    return frozenset(word.strip().lower() for word in words if word.strip())


def load_stopwords(path: Path | None = None) -> StopwordSet:
    return StopwordSet.load(path)
