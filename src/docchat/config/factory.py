"""Builds the external service clients from environment settings."""

from loguru import logger
from openai import AsyncOpenAI

from docchat.errors import ConfigurationError
from docchat.llm import BaseEmbedder, BaseLLM, BaseTokenizer, OpenAIChatLLM, OpenAIEmbedder, TiktokenTokenizer

from .models import GenerationConfig
from .settings import Settings, settings as default_settings


class ComponentFactory:
    """Creates the embedder, generation client and tokenizer.

    Every method reads ``Settings``; the module-level settings loaded from the
    environment are used when none are passed.
    """

    @staticmethod
    def _api_key(settings: Settings) -> str:
        if not settings.OPENAI_API_KEY:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set",
                details={"base_url": settings.OPENAI_BASE_URL},
            )
        return settings.OPENAI_API_KEY

    @staticmethod
    def create_embedder(settings: Settings | None = None) -> BaseEmbedder:
        """Create the OpenAI-compatible embedder for ``EMBEDDING_MODEL``."""
        settings = settings or default_settings
        logger.info(f"Creating embedder: {settings.EMBEDDING_MODEL}")
        return OpenAIEmbedder(
            base_url=settings.OPENAI_BASE_URL,
            api_key=ComponentFactory._api_key(settings),
            model=settings.EMBEDDING_MODEL,
        )

    @staticmethod
    def create_llm(
        settings: Settings | None = None,
        config: GenerationConfig | None = None,
    ) -> BaseLLM:
        """Create the chat client; ``CHAT_MODEL`` overrides ``config.model``."""
        settings = settings or default_settings
        config = (config or GenerationConfig()).model_copy(update={"model": settings.CHAT_MODEL})
        logger.info(f"Creating LLM: {config.model}")
        client = AsyncOpenAI(api_key=ComponentFactory._api_key(settings), base_url=settings.OPENAI_BASE_URL)
        return OpenAIChatLLM(client, config)

    @staticmethod
    def create_tokenizer(settings: Settings | None = None) -> BaseTokenizer:
        """Create the tokenizer for ``TOKENIZER_ENCODING``."""
        settings = settings or default_settings
        logger.info(f"Creating tokenizer: {settings.TOKENIZER_ENCODING}")
        return TiktokenTokenizer(encoding_name=settings.TOKENIZER_ENCODING)
