"""Token counting for context budgets."""

from abc import ABC, abstractmethod

import tiktoken
from loguru import logger


class BaseTokenizer(ABC):
    """Counts tokens the way the generation model accounts for them."""

    @abstractmethod
    def count_tokens(self, text: str) -> int:
        pass


class TiktokenTokenizer(BaseTokenizer):
    """Tokenizer backed by a tiktoken encoding.

    The encoding is loaded on first use; tiktoken may need to download the
    BPE ranks the first time an encoding is requested.

    Attributes:
        encoding_name: tiktoken encoding, e.g. "cl100k_base"
        model: When given, the encoding registered for this model is used instead
    """

    def __init__(self, encoding_name: str = "cl100k_base", model: str | None = None):
        self.encoding_name = encoding_name
        self.model = model
        self._encoding: tiktoken.Encoding | None = None

    @property
    def encoding(self) -> tiktoken.Encoding:
        if self._encoding is None:
            if self.model:
                try:
                    self._encoding = tiktoken.encoding_for_model(self.model)
                except KeyError:
                    logger.warning(
                        f"No tiktoken encoding registered for '{self.model}', "
                        f"using {self.encoding_name}"
                    )
            if self._encoding is None:
                self._encoding = tiktoken.get_encoding(self.encoding_name)
            logger.debug(f"Loaded tiktoken encoding {self._encoding.name}")
        return self._encoding

    def count_tokens(self, text: str) -> int:
        if not text:
            return 0
        return len(self.encoding.encode(text, disallowed_special=()))
