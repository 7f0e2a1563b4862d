"""Unit tests for settings."""

from pathlib import Path

from pydantic import ValidationError
import pytest

from index_adapter.config import DEFAULT_HIGHLIGHT_PRE_TAG, Settings


@pytest.mark.unit
class TestSettings:
    """Defaults, environment overrides and validation."""

    def test_defaults(self, monkeypatch):
        for key in ("INDEX_ADAPTER_HIGHLIGHT_FRAGMENT_SIZE", "INDEX_ADAPTER_STOPWORD_PATH"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings(_env_file=None)

        assert settings.stopword_path is None
        assert settings.min_keyword_length == 2
        assert settings.highlight_fragment_size == 100
        assert settings.highlight_pre_tag == DEFAULT_HIGHLIGHT_PRE_TAG
        assert settings.highlight_post_tag == "</span>"
        assert settings.jieba_hmm is True

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("INDEX_ADAPTER_HIGHLIGHT_FRAGMENT_SIZE", "40")
        monkeypatch.setenv("INDEX_ADAPTER_STOPWORD_PATH", str(tmp_path / "stop.dic"))
        monkeypatch.setenv("INDEX_ADAPTER_LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.highlight_fragment_size == 40
        assert settings.stopword_path == Path(tmp_path / "stop.dic")
        assert settings.log_level == "debug"

    def test_rejects_non_positive_fragment_size(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, highlight_fragment_size=0)

    def test_rejects_empty_tags(self):
        with pytest.raises(ValidationError, match="Highlight tags"):
            Settings(_env_file=None, highlight_pre_tag="")

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            Settings(_env_file=None, log_level="loud")
