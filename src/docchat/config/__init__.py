"""Configuration system for DocChat."""

from .models import (
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_USER_PROMPT_TEMPLATE,
    GenerationConfig,
    IngestionConfig,
    RetrievalConfig,
    SegmenterConfig,
)
from .settings import Settings, load_settings, settings

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_USER_PROMPT_TEMPLATE",
    "GenerationConfig",
    "IngestionConfig",
    "RetrievalConfig",
    "SegmenterConfig",
    "Settings",
    "load_settings",
    "settings",
]
