"""Base classes and abstract interfaces for RAG components."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from agentkit.exceptions import EmbeddingError

if TYPE_CHECKING:
    from .document import Document, DocumentChunk, DocumentMetadata, IndexStats, RAGQuery, RAGResult


class BaseEmbedding(ABC):
    """Abstract base class for embedding providers.

    An embedding provider maps a batch of texts to fixed-length vectors,
    one per input and in input order.
    """

    @abstractmethod
    async def generate(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts.

        Args:
            texts: Texts to embed

        Returns:
            One embedding vector per text, in the same order

        Raises:
            EmbeddingError: If the provider call fails
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the dimension of the embedding vectors."""
        pass

    def get_dimensions(self) -> int:
        return self.dimension

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single query as a one-element batch."""
        embeddings = await self.generate([text])
        if not embeddings:
            raise EmbeddingError("provider returned no vector for the query")
        return embeddings[0]


class BaseVectorStore(ABC):
    """Abstract base class for vector stores."""

    @abstractmethod
    def store(
        self,
        chunks: list["DocumentChunk"],
        metadata: Optional[dict[str, "DocumentMetadata"]] = None,
    ) -> None:
        """Upsert embedded chunks.

        Args:
            chunks: Chunks to store, keyed by their id
            metadata: Optional document metadata keyed by document id
        """
        pass

    @abstractmethod
    def search(self, query_embedding: list[float], query: "RAGQuery") -> "RAGResult":
        """Rank stored chunks against a query vector."""
        pass

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Remove every chunk of a document. Unknown ids are ignored."""
        pass

    @abstractmethod
    def get_stats(self) -> "IndexStats":
        pass


class BaseChunker(ABC):
    """Abstract base class for document chunkers."""

    @abstractmethod
    def chunk_document(self, document: "Document") -> list["DocumentChunk"]:
        pass

    def chunk_documents(self, documents: list["Document"]) -> list["DocumentChunk"]:
        """Chunk several documents into one flat list."""
        return [chunk for document in documents for chunk in self.chunk_document(document)]
