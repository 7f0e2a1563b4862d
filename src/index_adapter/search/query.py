"""Term queries and the scorer used to rank highlight fragments."""

from __future__ import annotations

from dataclasses import dataclass

from index_adapter.errors import QuerySyntaxError
from index_adapter.search.tokenizer import Token


QUERY_SPECIAL_CHARS = frozenset('\\+-!():^[]"{}~*?|&/')


def escape_query(text: str) -> str:
    """Backslash-escape every character with meaning in the query syntax."""
    return "".join(f"\\{char}" if char in QUERY_SPECIAL_CHARS else char for char in text)


def unescape_query(text: str) -> str:
    """Reverse :func:`escape_query`; a trailing lone backslash is a syntax error."""
    chars: list[str] = []
    escaped = False
    for char in text:
        if escaped:
            chars.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            chars.append(char)
    if escaped:
        raise QuerySyntaxError(f"Dangling escape at end of term {text!r}")
    return "".join(chars)


def normalize_key(key: str) -> str:
    return key.strip().lower()


@dataclass(frozen=True)
class TermQuery:
    """Exact match of one term, against ``field`` or the default field when None."""

    text: str
    field: str | None = None
    boost: float = 1.0

    @classmethod
    def for_key(cls, key: str, field: str | None = None) -> TermQuery:
        """Query for a user-supplied key: trimmed, lowercased and escaped, then parsed back."""
        return cls.parse(escape_query(normalize_key(key)), field=field)

    @classmethod
    def parse(cls, query_string: str, field: str | None = None) -> TermQuery:
        term = unescape_query(query_string)
        if not term:
            raise QuerySyntaxError("Empty term")
        return cls(text=term, field=field)

    @property
    def query_string(self) -> str:
        escaped = escape_query(self.text)
        return f"{self.field}:{escaped}" if self.field else escaped

    def matches(self, token_text: str) -> bool:
        return token_text.lower() == self.text


class QueryScorer:
    """Scores tokens against a query, one fragment at a time.

    A matching token scores the query boost. Within a fragment each distinct
    term counts once towards the fragment score; ``hits`` counts every
    matching occurrence.
    """

    def __init__(self, query: TermQuery) -> None:
        self.query = query
        self._found: set[str] = set()
        self.fragment_score = 0.0
        self.hits = 0

    def start_fragment(self) -> None:
        self._found = set()
        self.fragment_score = 0.0
        self.hits = 0

    def token_score(self, token: Token) -> float:
        if not self.query.matches(token.text):
            return 0.0
        term = token.text.lower()
        self.hits += 1
        if term not in self._found:
            self._found.add(term)
            self.fragment_score += self.query.boost
        return self.query.boost
