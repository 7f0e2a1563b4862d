"""Unit tests for query escaping, term queries and scoring."""

import pytest

from index_adapter.errors import QuerySyntaxError
from index_adapter.search.query import QueryScorer, TermQuery, escape_query, unescape_query
from index_adapter.search.tokenizer import Token


def _token(text: str) -> Token:
    return Token(text=text, position=0, start_char=0, end_char=len(text))


@pytest.mark.unit
class TestEscaping:
    """Query syntax characters are backslash escaped."""

    def test_escapes_operators(self):
        assert escape_query("c++ (beta)") == r"c\+\+ \(beta\)"

    def test_escapes_backslash_and_slash(self):
        assert escape_query("a\\b/c") == r"a\\b\/c"

    def test_plain_text_untouched(self):
        assert escape_query("北京 quick") == "北京 quick"

    def test_unescape_reverses_escape(self):
        raw = 'title:"x" && y~2'
        assert unescape_query(escape_query(raw)) == raw

    def test_dangling_escape_is_a_syntax_error(self):
        with pytest.raises(QuerySyntaxError):
            unescape_query("abc\\")


@pytest.mark.unit
class TestTermQuery:
    """Term queries built from user keys."""

    def test_for_key_trims_and_lowercases(self):
        query = TermQuery.for_key("  Quick ")

        assert query.text == "quick"
        assert query.field is None

    def test_query_string_is_escaped(self):
        assert TermQuery.for_key("C++").query_string == r"c\+\+"
        assert TermQuery("a:b", field="title").query_string == r"title:a\:b"

    def test_parse_rejects_empty_term(self):
        with pytest.raises(QuerySyntaxError):
            TermQuery.parse("")

    def test_matches_case_insensitively(self):
        query = TermQuery.for_key("fox")

        assert query.matches("Fox")
        assert not query.matches("foxes")


@pytest.mark.unit
class TestQueryScorer:
    """Distinct terms count once per fragment, every hit is tallied."""

    def test_scores_distinct_terms_once(self):
        scorer = QueryScorer(TermQuery.for_key("fox"))

        assert scorer.token_score(_token("fox")) == 1.0
        assert scorer.token_score(_token("FOX")) == 1.0
        assert scorer.token_score(_token("dog")) == 0.0
        assert scorer.fragment_score == 1.0
        assert scorer.hits == 2

    def test_start_fragment_resets(self):
        scorer = QueryScorer(TermQuery.for_key("fox"))
        scorer.token_score(_token("fox"))

        scorer.start_fragment()

        assert scorer.fragment_score == 0.0
        assert scorer.hits == 0
