"""Best-fragment highlighting of a query key within stored text.

The text is tokenized in index mode so matches line up with how the text
was indexed. Tokens are walked once: overlapping tokens are merged into
groups, and the text is cut into fragments of roughly ``fragment_size``
characters, always at token-group boundaries. Each fragment is scored with
a :class:`QueryScorer`; the best one is returned with every matching group
wrapped in the highlight tags. Fragments with equal scores are ranked by
matching occurrences before position, so unlike Lucene's fragment queue the
earliest fragment only wins when hit counts tie too.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
import logging

from index_adapter.config import DEFAULT_HIGHLIGHT_POST_TAG, DEFAULT_HIGHLIGHT_PRE_TAG
from index_adapter.errors import ErrorKind, IndexAdapterError, TokenizationError
from index_adapter.observability.metrics import record_degradation, track_latency
from index_adapter.observability.tracing import create_span
from index_adapter.search.query import QueryScorer, TermQuery
from index_adapter.search.tokenizer import Token, Tokenizer, TokenizeMode


logger = logging.getLogger(__name__)

DEFAULT_FRAGMENT_SIZE = 100
DEFAULT_MAX_CHARS_TO_ANALYZE = 50 * 1024


@dataclass(frozen=True)
class HighlightResult:
    """Rendered text plus how it was obtained.

    ``matched`` is True when ``text`` is a marked-up fragment, False when it
    is the original input returned unchanged.
    """

    text: str
    matched: bool = False
    error: ErrorKind | None = None


@dataclass
class TokenGroup:
    start: int
    end: int
    score: float = 0.0

    def overlaps(self, token: Token) -> bool:
        return token.start_char < self.end

    def add(self, token: Token, score: float) -> None:
        self.start = min(self.start, token.start_char)
        self.end = max(self.end, token.end_char)
        self.score = max(self.score, score)


@dataclass
class TextFragment:
    number: int
    start: int
    end: int = 0
    score: float = 0.0
    hits: int = 0
    groups: list[TokenGroup] = field(default_factory=list)

    def rank(self) -> tuple[float, int, int]:
        return (self.score, self.hits, -self.number)


class SimpleFragmenter:
    """Starts a new fragment once a token ends past the next ``fragment_size`` boundary."""

    def __init__(self, fragment_size: int = DEFAULT_FRAGMENT_SIZE) -> None:
        if fragment_size < 1:
            raise ValueError("fragment_size must be positive")
        self.fragment_size = fragment_size
        self._count = 1

    def start(self) -> None:
        self._count = 1

    def is_new_fragment(self, token: Token) -> bool:
        if token.end_char >= self.fragment_size * self._count:
            self._count += 1
            return True
        return False


def build_fragments(
    text: str,
    tokens: Iterable[Token],
    scorer: QueryScorer,
    fragmenter: SimpleFragmenter,
    *,
    max_chars_to_analyze: int = DEFAULT_MAX_CHARS_TO_ANALYZE,
) -> list[TextFragment]:
    """Cut ``text`` into scored fragments covering it from start to end."""
    fragments: list[TextFragment] = []
    fragmenter.start()
    scorer.start_fragment()
    current = TextFragment(number=0, start=0)
    group: TokenGroup | None = None
    last_end = 0

    for token in tokens:
        if token.start_char >= len(text) or token.start_char >= max_chars_to_analyze:
            break
        if token.end_char > len(text) or token.start_char < 0 or token.end_char < token.start_char:
            raise TokenizationError(
                f"Token {token.text!r} has offsets {token.start_char}-{token.end_char} "
                f"outside text of length {len(text)}"
            )
        if group is not None and not group.overlaps(token):
            current.groups.append(group)
            last_end = group.end
            group = None

        if fragmenter.is_new_fragment(token):
            current.end = last_end
            current.score = scorer.fragment_score
            current.hits = scorer.hits
            fragments.append(current)
            current = TextFragment(number=len(fragments), start=last_end)
            scorer.start_fragment()

        score = scorer.token_score(token)
        if group is None:
            group = TokenGroup(start=token.start_char, end=token.end_char, score=score)
        else:
            group.add(token, score)

    if group is not None:
        current.groups.append(group)
        last_end = group.end
    current.score = scorer.fragment_score
    current.hits = scorer.hits
    current.end = len(text) if len(text) <= max_chars_to_analyze else last_end
    fragments.append(current)
    return fragments


class Highlighter:
    """Marks the best matching fragment of a text for a single query key."""

    def __init__(
        self,
        tokenizer: Tokenizer,
        *,
        fragment_size: int = DEFAULT_FRAGMENT_SIZE,
        pre_tag: str = DEFAULT_HIGHLIGHT_PRE_TAG,
        post_tag: str = DEFAULT_HIGHLIGHT_POST_TAG,
        max_chars_to_analyze: int = DEFAULT_MAX_CHARS_TO_ANALYZE,
    ) -> None:
        self.tokenizer = tokenizer
        self.fragment_size = fragment_size
        self.pre_tag = pre_tag
        self.post_tag = post_tag
        self.max_chars_to_analyze = max_chars_to_analyze

    def highlight(self, text: str | None, key: str | None) -> str | None:
        """Return the marked best fragment, or ``text`` unchanged when nothing matches."""
        return self.highlight_result(text, key).text

    def highlight_result(self, text: str | None, key: str | None) -> HighlightResult:
        if not key or not key.strip() or not text or not text.strip():
            return HighlightResult(text=text)

        with create_span("index_adapter.highlight", attributes={"text.length": len(text)}), track_latency("highlight"):
            try:
                fragment = self.best_fragment(text, TermQuery.for_key(key))
            except IndexAdapterError as exc:
                logger.error("Unable to highlight text: %s", exc.message, exc_info=exc)
                record_degradation("highlight", exc.kind)
                return HighlightResult(text=text, error=exc.kind)
            except Exception as exc:
                logger.error("Unable to highlight text: %s", exc, exc_info=exc)
                record_degradation("highlight", ErrorKind.TOKENIZATION)
                return HighlightResult(text=text, error=ErrorKind.TOKENIZATION)

        if fragment is None:
            return HighlightResult(text=text)
        return HighlightResult(text=fragment, matched=True)

    def best_fragment(self, text: str, query: TermQuery) -> str | None:
        """Marked-up text of the highest scoring fragment, None when no fragment scores."""
        tokens = self.tokenizer.tokenize(text, TokenizeMode.INDEX)
        fragments = build_fragments(
            text,
            tokens,
            QueryScorer(query),
            SimpleFragmenter(self.fragment_size),
            max_chars_to_analyze=self.max_chars_to_analyze,
        )
        best = max(fragments, key=TextFragment.rank)
        if best.score <= 0:
            return None
        return self.render(text, best)

    def render(self, text: str, fragment: TextFragment) -> str:
        pieces: list[str] = []
        cursor = fragment.start
        for group in fragment.groups:
            if group.score <= 0:
                continue
            pieces.append(text[cursor : group.start])
            pieces.append(f"{self.pre_tag}{text[group.start : group.end]}{self.post_tag}")
            cursor = group.end
        pieces.append(text[cursor : fragment.end])
        return "".join(pieces)
