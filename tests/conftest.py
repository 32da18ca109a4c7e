"""
Test configuration and fixtures.
"""

import pytest

from agentkit.exceptions import EmbeddingError
from agentkit.rag import BaseEmbedding, FakeEmbedding, InMemoryVectorStore, RAGService
from agentkit.utils.config import RAGConfig


class StaticEmbedding(BaseEmbedding):
    """Maps known texts to fixed vectors and counts provider calls."""

    def __init__(self, vectors: dict[str, list[float]], default: list[float] | None = None):
        self.vectors = vectors
        self.default = default or [0.0] * len(next(iter(vectors.values())))
        self.calls: list[list[str]] = []

    @property
    def dimension(self) -> int:
        return len(self.default)

    async def generate(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self.vectors.get(text, self.default) for text in texts]


class ShortEmbedding(BaseEmbedding):
    """Returns one vector fewer than requested."""

    @property
    def dimension(self) -> int:
        return 2

    async def generate(self, texts: list[str]) -> list[list[float]]:
        return [[1.0, 0.0] for _ in texts[1:]]


class FailingEmbedding(BaseEmbedding):
    """Raises the given exception on every call."""

    def __init__(self, error: Exception):
        self.error = error

    @property
    def dimension(self) -> int:
        return 2

    async def generate(self, texts: list[str]) -> list[list[float]]:
        raise self.error


@pytest.fixture
def fake_embedding():
    return FakeEmbedding(dimension=64)


@pytest.fixture
def service(fake_embedding):
    return RAGService(embedding=fake_embedding, config=RAGConfig(chunk_size=100, chunk_overlap=20))


@pytest.fixture
def store():
    return InMemoryVectorStore(dimension=3)


@pytest.fixture
def failing_embedding():
    return FailingEmbedding(EmbeddingError("provider unavailable"))
