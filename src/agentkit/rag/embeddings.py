"""Embedding provider implementations."""

import hashlib
import logging
import random
from typing import Any, Optional

import httpx

from agentkit.exceptions import EmbeddingError

from .base import BaseEmbedding

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIEmbedding(BaseEmbedding):
    """OpenAI-compatible embedding provider over HTTP.

    Sends ``POST {base_url}/embeddings`` with ``{"input", "model",
    "encoding_format": "float"}``, plus ``"dimensions"`` when set, and
    reads ``data[*].embedding``.
    Works with any server exposing the same endpoint.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        model: str = "text-embedding-3-small",
        dimensions: Optional[int] = None,
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the provider.

        Args:
            api_key: Bearer token for the API
            base_url: API root, without the ``/embeddings`` suffix
            model: Embedding model name
            dimensions: Vector length, inferred from the model name if None
            timeout: Request timeout in seconds (None disables it)
            transport: Optional httpx transport, mainly for tests
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._dimensions = dimensions
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def dimension(self) -> int:
        if self._dimensions is not None:
            return self._dimensions
        # text-embedding-3-large is 3072, the small and ada models are 1536
        return 3072 if "large" in self.model else 1536

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def generate(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        client = self._get_client()
        payload = {"input": texts, "model": self.model, "encoding_format": "float"}
        if self._dimensions is not None:
            payload["dimensions"] = self._dimensions

        try:
            response = await client.post("embeddings", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise EmbeddingError(
                f"API returned {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise EmbeddingError(f"request to {self.base_url} failed: {e}") from e
        except ValueError as e:
            raise EmbeddingError("response body is not valid JSON") from e

        embeddings = self._parse_response(data)
        if len(embeddings) != len(texts):
            raise EmbeddingError(f"expected {len(texts)} vectors, got {len(embeddings)}")

        logger.debug(f"Embedded {len(texts)} texts with {self.model}")
        return embeddings

    @staticmethod
    def _parse_response(data: Any) -> list[list[float]]:
        items = data.get("data") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise EmbeddingError("response has no 'data' list")

        # Results carry their input position; restore input order when present
        if all(isinstance(item, dict) and "index" in item for item in items):
            items = sorted(items, key=lambda item: item["index"])

        embeddings = []
        for item in items:
            embedding = item.get("embedding") if isinstance(item, dict) else None
            if not isinstance(embedding, list):
                raise EmbeddingError("response item has no 'embedding' list")
            embeddings.append([float(v) for v in embedding])
        return embeddings


class FakeEmbedding(BaseEmbedding):
    """Fake embedding that generates deterministic embeddings from text.

    The same text always maps to the same vector, so identical query and
    chunk texts score a similarity of 1.0.
    """

    def __init__(self, dimension: int = 384, seed: int = 42):
        """Initialize the fake embedding.

        Args:
            dimension: Dimension of the embedding vectors
            seed: Seed mixed into every text hash
        """
        self._dimension = dimension
        self.seed = seed

    @property
    def dimension(self) -> int:
        return self._dimension

    def _hash_text(self, text: str) -> list[float]:
        digest = hashlib.sha256(f"{self.seed}:{text}".encode()).digest()
        rng = random.Random(int.from_bytes(digest, "big"))
        return [rng.uniform(-1.0, 1.0) for _ in range(self._dimension)]

    async def generate(self, texts: list[str]) -> list[list[float]]:
        return [self._hash_text(text) for text in texts]


class RandomEmbedding(BaseEmbedding):
    """Random vectors in [-1, 1]. Not deterministic."""

    def __init__(self, dimension: int = 384):
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    async def generate(self, texts: list[str]) -> list[list[float]]:
        return [[random.uniform(-1.0, 1.0) for _ in range(self._dimension)] for _ in texts]


class DummyEmbedding(BaseEmbedding):
    """Zero vectors of a fixed dimension. Every similarity against them is 0."""

    def __init__(self, dimension: int = 384):
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    async def generate(self, texts: list[str]) -> list[list[float]]:
        return [[0.0] * self._dimension for _ in texts]
