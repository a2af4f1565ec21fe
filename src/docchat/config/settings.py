import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file from the project root
# This file: src/docchat/config/settings.py
SERVER_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = SERVER_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()


class Settings(BaseModel):
    """Global Application Settings"""

    # Environment
    ENV: str = Field(default="development", description="Environment: development, production, testing")
    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Model API
    OPENAI_API_KEY: Optional[str] = Field(default=None, description="OpenAI API Key")
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1", description="OpenAI-compatible API base URL")
    EMBEDDING_MODEL: str = Field(default="text-embedding-ada-002", description="Embedding model name")
    CHAT_MODEL: str = Field(default="gpt-4-1106-preview", description="Answer generation model name")
    TOKENIZER_ENCODING: str = Field(default="cl100k_base", description="tiktoken encoding used for context budgets")

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True
    }


def load_settings() -> Settings:
    """Load settings from environment variables."""
    defaults = Settings()
    return Settings(
        ENV=os.getenv("ENV", defaults.ENV),
        LOG_LEVEL=os.getenv("LOG_LEVEL", defaults.LOG_LEVEL),
        OPENAI_API_KEY=os.getenv("OPENAI_API_KEY"),
        OPENAI_BASE_URL=os.getenv("OPENAI_BASE_URL", defaults.OPENAI_BASE_URL),
        EMBEDDING_MODEL=os.getenv("EMBEDDING_MODEL", defaults.EMBEDDING_MODEL),
        CHAT_MODEL=os.getenv("CHAT_MODEL", defaults.CHAT_MODEL),
        TOKENIZER_ENCODING=os.getenv("TOKENIZER_ENCODING", defaults.TOKENIZER_ENCODING),
    )


# Global settings instance
settings = load_settings()
