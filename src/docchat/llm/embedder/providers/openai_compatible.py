"""
OpenAI-compatible embedder.

Works with any API that follows the OpenAI embeddings format, including
OpenAI, Azure OpenAI and local models served through a compatible layer.

The embedder is constructed explicitly and injected into the pipeline; it
does not retry on its own. Failures are classified into the DocChat error
hierarchy so the embedding generator can tell service outages apart from
rejected inputs.

Example Usage:
--------------
    embedder = OpenAIEmbedder(
        base_url="https://api.openai.com/v1",
        api_key="sk-xxx",
        model="text-embedding-ada-002",
    )
    vectors = await embedder.embed(["Hello world", "How are you?"])
    await embedder.aclose()
"""

import logging

import httpx

from docchat.errors import (
    MalformedResponseError,
    RequestTimeoutError,
    ServiceConnectionError,
    classify_http_error,
)
from ..base import BaseEmbedder

logger = logging.getLogger(__name__)


class OpenAIEmbedder(BaseEmbedder):
    """
    Embedder speaking the ``POST {base_url}/embeddings`` protocol.

    Attributes:
        base_url: The API base URL (e.g., "https://api.openai.com/v1")
        api_key: API authentication key
        model: Model identifier (e.g., "text-embedding-ada-002")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the OpenAI-compatible embedder.

        Args:
            base_url: API endpoint base URL (trailing slash will be stripped)
            api_key: Authentication key for the API
            model: Model name to use for embeddings
            timeout: Request timeout in seconds
            client: Pre-built httpx client (a new one is created when omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self._dimension = 1536  # Default for text-embedding-ada-002, updated on first call

    async def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        url = f"{self.base_url}/embeddings"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        payload = {
            "input": texts,
            "model": self.model
        }

        try:
            resp = await self.client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Embedding request timed out: {e}", timeout=self.timeout, original_error=e
            ) from e
        except httpx.TransportError as e:
            raise ServiceConnectionError(
                f"Embedding service unreachable: {e}", details={"url": url}, original_error=e
            ) from e

        if resp.status_code >= 400:
            error = classify_http_error(resp.status_code, resp.text, dict(resp.headers))
            logger.error(f"Embedding request failed: {error}")
            raise error

        try:
            results = resp.json().get("data", [])
        except ValueError as e:
            raise MalformedResponseError("Embedding response is not valid JSON", original_error=e) from e

        # Sort by index to ensure correct order
        results.sort(key=lambda x: x.get("index", 0))
        vector_list = [item["embedding"] for item in results]

        if vector_list:
            self._dimension = len(vector_list[0])

        return vector_list

    @property
    def dimension(self) -> int:
        return self._dimension

    async def aclose(self) -> None:
        """Close the HTTP client if this embedder created it."""
        if self._owns_client:
            await self.client.aclose()
