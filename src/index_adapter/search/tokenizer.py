"""Tokenizer boundary and the jieba-backed reference tokenizer.

Two segmentation modes are exposed. ``SEARCH`` emits finer-grained,
possibly overlapping sub-words and is used to turn user input into query
keywords. ``INDEX`` emits the longest-match, non-overlapping segmentation
used when text is indexed, so highlighting must use it too.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path
import re
import threading
from typing import Protocol

import jieba

from index_adapter.errors import TokenizationError


logger = logging.getLogger(__name__)

_WORD_PATTERN = re.compile(r"\w", re.UNICODE)


class TokenizeMode(str, Enum):
    SEARCH = "search"
    INDEX = "index"


@dataclass
class Token:
    """A token with its character offsets in the source text."""

    text: str
    position: int
    start_char: int
    end_char: int


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers.

    Implementations must be safe to share between threads; every call to
    ``tokenize`` owns its own stream state. Failures should be raised as
    :class:`~index_adapter.errors.TokenizationError`, although callers in this
    package treat any exception from a tokenizer as a tokenization failure.
    """

    def tokenize(self, text: str, mode: TokenizeMode) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class JiebaTokenizer:
    """Chinese-aware tokenizer built on a dedicated ``jieba.Tokenizer`` instance.

    Latin words and numbers pass through as whole tokens. Whitespace and
    punctuation-only pieces are dropped. Errors raised by jieba surface as
    :class:`TokenizationError` so callers can degrade gracefully.
    """

    _JIEBA_MODES = {TokenizeMode.SEARCH: "search", TokenizeMode.INDEX: "default"}

    def __init__(
        self,
        *,
        dictionary: Path | None = None,
        user_dict: Path | None = None,
        hmm: bool = True,
    ) -> None:
        if dictionary is not None:
            self._jieba = jieba.Tokenizer(dictionary=str(dictionary))
        else:
            self._jieba = jieba.Tokenizer()
        self._hmm = hmm
        self._user_dict = user_dict
        self._user_dict_loaded = False
        self._lock = threading.Lock()

    def initialize(self) -> None:
        """Load dictionaries eagerly instead of on the first call."""
        try:
            self._jieba.initialize()
            if self._user_dict is not None and not self._user_dict_loaded:
                with self._lock:
                    if not self._user_dict_loaded:
                        self._jieba.load_userdict(str(self._user_dict))
                        self._user_dict_loaded = True
                        logger.debug("Loaded jieba user dictionary %s", self._user_dict)
        except Exception as exc:
            raise TokenizationError(f"Unable to load jieba dictionaries: {exc}") from exc

    def tokenize(self, text: str, mode: TokenizeMode) -> Iterator[Token]:
        self.initialize()
        jieba_mode = self._JIEBA_MODES[TokenizeMode(mode)]
        position = 0
        try:
            for word, start, end in self._jieba.tokenize(text, mode=jieba_mode, HMM=self._hmm):
                if not _WORD_PATTERN.search(word):
                    continue
                yield Token(text=word, position=position, start_char=start, end_char=end)
                position += 1
        except Exception as exc:
            raise TokenizationError(f"jieba failed while tokenizing in {jieba_mode} mode: {exc}") from exc
