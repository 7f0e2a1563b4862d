"""Shared test fixtures and configuration."""

from collections.abc import Iterator
import re

import pytest

from index_adapter.errors import TokenizationError
from index_adapter.search.stopwords import StopwordSet
from index_adapter.search.tokenizer import JiebaTokenizer, Token, TokenizeMode


class RegexTokenizer:
    """Deterministic stand-in for jieba: splits on word runs, keeping decimal points."""

    def __init__(self, pattern: str = r"[\w.]+") -> None:
        self.pattern = re.compile(pattern, re.UNICODE)
        self.modes: list[TokenizeMode] = []

    def tokenize(self, text: str, mode: TokenizeMode) -> Iterator[Token]:
        self.modes.append(mode)
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(text=match.group(0), position=position, start_char=match.start(), end_char=match.end())


class FailingTokenizer(RegexTokenizer):
    """Emits ``fail_after`` tokens, then raises like a broken analyzer.

    ``error`` replaces the default TokenizationError, for tokenizers that
    fail with arbitrary exceptions.
    """

    def __init__(self, fail_after: int = 0, error: Exception | None = None) -> None:
        super().__init__()
        self.fail_after = fail_after
        self.error = error

    def tokenize(self, text: str, mode: TokenizeMode) -> Iterator[Token]:
        for index, token in enumerate(super().tokenize(text, mode)):
            if index >= self.fail_after:
                raise self.error or TokenizationError("analyzer exploded")
            yield token


@pytest.fixture
def regex_tokenizer():
    return RegexTokenizer()


@pytest.fixture
def english_stopwords():
    return StopwordSet.from_words(["the", "and", "of", "a", "is", "to"], source="test")


@pytest.fixture(scope="session")
def jieba_tokenizer():
    tokenizer = JiebaTokenizer()
    tokenizer.initialize()
    return tokenizer


@pytest.fixture
def failing_tokenizer():
    """Factory for tokenizers that fail after a number of tokens."""
    return FailingTokenizer
