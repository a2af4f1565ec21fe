"""Base LLM interface."""

from abc import ABC, abstractmethod

from docchat.entities.query import GenerationRequest, GenerationResult


class BaseLLM(ABC):
    """Abstract base class for answer generation.

    LLMs generate an answer to a question grounded in assembled context.
    """

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate an answer.

        Args:
            request: System prompt, context text and user question

        Returns:
            Generated answer text

        Raises:
            GenerationError: If the generation service fails
        """
        pass
