"""Tests for settings and component configuration models."""

import pytest
from pydantic import ValidationError

from docchat.config import (
    DEFAULT_SYSTEM_PROMPT,
    GenerationConfig,
    IngestionConfig,
    RetrievalConfig,
    SegmenterConfig,
    Settings,
    load_settings,
)


class TestComponentConfig:
    def test_defaults(self):
        assert SegmenterConfig().max_chunk_size == 1000
        retrieval = RetrievalConfig()
        assert retrieval.similarity_threshold == 0.7
        assert retrieval.max_chunks == 15
        assert retrieval.max_context_tokens == 50000
        ingestion = IngestionConfig()
        assert ingestion.max_file_size == 10 * 1024 * 1024
        assert ingestion.storage_batch_size == 100
        assert ingestion.compensate_on_chunk_failure is True

    def test_generation_defaults(self):
        config = GenerationConfig()
        assert config.temperature == 0.5
        assert config.max_tokens == 4000
        assert config.system_prompt == DEFAULT_SYSTEM_PROMPT
        assert "{context}" in config.user_prompt_template
        assert "{question}" in config.user_prompt_template

    @pytest.mark.parametrize("factory", [
        lambda: SegmenterConfig(max_chunk_size=0),
        lambda: RetrievalConfig(similarity_threshold=1.5),
        lambda: RetrievalConfig(max_chunks=0),
        lambda: IngestionConfig(storage_batch_size=0),
    ])
    def test_invalid_values(self, factory):
        with pytest.raises(ValidationError):
            factory()


class TestSettings:
    def test_load_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("EMBEDDING_MODEL", "text-embedding-3-small")

        settings = load_settings()

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.OPENAI_API_KEY == "sk-test"
        assert settings.EMBEDDING_MODEL == "text-embedding-3-small"

    def test_defaults_when_unset(self, monkeypatch):
        for name in ("OPENAI_BASE_URL", "CHAT_MODEL", "TOKENIZER_ENCODING"):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.OPENAI_BASE_URL == "https://api.openai.com/v1"
        assert settings.CHAT_MODEL == "gpt-4-1106-preview"
        assert settings.TOKENIZER_ENCODING == "cl100k_base"

    def test_frozen(self):
        with pytest.raises(ValidationError):
            Settings().LOG_LEVEL = "DEBUG"
