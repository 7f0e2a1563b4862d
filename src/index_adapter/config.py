"""Centralized configuration for index-adapter using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_HIGHLIGHT_PRE_TAG = '<span class="highlight">'
DEFAULT_HIGHLIGHT_POST_TAG = "</span>"


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``INDEX_ADAPTER_*`` environment variables.

    Every value has a working default so the toolkit can be built without
    any environment at all. Paths are only validated for type here; a
    missing stopword file degrades at load time instead of failing startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="INDEX_ADAPTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Stopwords
    stopword_path: Path | None = Field(
        default=None,
        description="Line-oriented stopword dictionary; the packaged stopword.dic is used when unset",
    )

    # Keyword segmentation
    min_keyword_length: int = Field(default=2, ge=1, description="Shortest token accepted as a keyword")

    # Highlighting
    highlight_fragment_size: int = Field(default=100, ge=1, description="Target fragment size in characters")
    highlight_pre_tag: str = Field(default=DEFAULT_HIGHLIGHT_PRE_TAG, description="Markup inserted before a match")
    highlight_post_tag: str = Field(default=DEFAULT_HIGHLIGHT_POST_TAG, description="Markup inserted after a match")

    # Tokenizer
    jieba_dictionary: Path | None = Field(default=None, description="Replacement main dictionary for jieba")
    jieba_user_dict: Path | None = Field(default=None, description="Additional user dictionary loaded into jieba")
    jieba_hmm: bool = Field(default=True, description="Use jieba's HMM model for unknown words")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @field_validator("highlight_pre_tag", "highlight_post_tag")
    @classmethod
    def _check_tag(cls, value: str) -> str:
        if not value:
            raise ValueError("Highlight tags must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"Unknown log level '{value}'")
        return normalized


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
