"""Answer generation through the OpenAI chat completions API."""

import logging

from openai import APIError, AsyncOpenAI

from docchat.config.models import GenerationConfig
from docchat.entities.query import GenerationRequest, GenerationResult
from docchat.errors import GenerationError
from ..base import BaseLLM

logger = logging.getLogger(__name__)


class OpenAIChatLLM(BaseLLM):
    """
    Generation service backed by an injected ``AsyncOpenAI`` client.

    The context and question are rendered into a single user message using
    ``config.user_prompt_template``; the system prompt comes from the request.
    """

    def __init__(self, client: AsyncOpenAI, config: GenerationConfig | None = None):
        self.client = client
        self.config = config or GenerationConfig()

    def build_messages(self, request: GenerationRequest) -> list[dict[str, str]]:
        user_content = self.config.user_prompt_template.format(
            context=request.context_text,
            question=request.question,
        )
        return [
            {"role": "system", "content": request.system_prompt},
            {"role": "user", "content": user_content},
        ]

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        messages = self.build_messages(request)
        logger.info(
            f"Requesting completion from {self.config.model} "
            f"(context chars={len(request.context_text)})"
        )

        try:
            completion = await self.client.chat.completions.create(
                model=self.config.model,
                messages=messages,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except APIError as e:
            logger.error(f"Chat completion failed: {e}")
            raise GenerationError(
                "Answer generation failed",
                details={"model": self.config.model},
                original_error=e,
            ) from e

        content = ""
        if completion.choices:
            content = completion.choices[0].message.content or ""
        return GenerationResult(content=content)
