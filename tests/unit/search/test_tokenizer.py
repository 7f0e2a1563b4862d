"""Unit tests for the jieba tokenizer adapter."""

import pytest

from index_adapter.errors import TokenizationError
from index_adapter.search.tokenizer import JiebaTokenizer, TokenizeMode


def _texts(tokenizer, text, mode):
    return [token.text for token in tokenizer.tokenize(text, mode)]


@pytest.mark.unit
class TestJiebaTokenizer:
    """Segmentation modes and offsets."""

    def test_index_mode_is_longest_match(self, jieba_tokenizer):
        assert _texts(jieba_tokenizer, "我爱北京天安门", TokenizeMode.INDEX) == ["我", "爱", "北京", "天安门"]

    def test_search_mode_adds_finer_grained_words(self, jieba_tokenizer):
        tokens = _texts(jieba_tokenizer, "中华人民共和国", TokenizeMode.SEARCH)

        assert "中华人民共和国" in tokens
        assert "人民" in tokens
        assert "共和国" in tokens

    def test_offsets_point_into_text(self, jieba_tokenizer):
        text = "我爱北京天安门 quick fox"

        for token in jieba_tokenizer.tokenize(text, TokenizeMode.INDEX):
            assert text[token.start_char : token.end_char] == token.text

    def test_whitespace_and_punctuation_are_dropped(self, jieba_tokenizer):
        tokens = _texts(jieba_tokenizer, "quick,  brown！ fox.", TokenizeMode.INDEX)

        assert tokens == ["quick", "brown", "fox"]

    def test_decimal_numbers_stay_whole(self, jieba_tokenizer):
        assert "3.14" in _texts(jieba_tokenizer, "pi is 3.14", TokenizeMode.INDEX)

    def test_positions_are_sequential(self, jieba_tokenizer):
        tokens = list(jieba_tokenizer.tokenize("quick brown fox", TokenizeMode.INDEX))

        assert [token.position for token in tokens] == [0, 1, 2]

    def test_user_dictionary_is_loaded(self, tmp_path):
        user_dict = tmp_path / "user.dict"
        user_dict.write_text("云计算平台 100 n\n", encoding="utf-8")
        tokenizer = JiebaTokenizer(user_dict=user_dict)

        assert "云计算平台" in _texts(tokenizer, "这是云计算平台", TokenizeMode.INDEX)

    def test_missing_user_dictionary_raises_tokenization_error(self, tmp_path):
        tokenizer = JiebaTokenizer(user_dict=tmp_path / "missing.dict")

        with pytest.raises(TokenizationError):
            list(tokenizer.tokenize("text", TokenizeMode.INDEX))
