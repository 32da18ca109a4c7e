"""RAG service: chunking, embedding and vector search behind one interface."""

import asyncio
import logging
import secrets
import time
from typing import Any, Optional, Union

from agentkit.exceptions import ConfigurationError, EmbeddingError
from agentkit.utils.config import RAGConfig

from .base import BaseChunker, BaseEmbedding, BaseVectorStore
from .chunking import DocumentChunker
from .document import (
    Document,
    DocumentChunk,
    DocumentMetadata,
    IndexStats,
    RAGFilters,
    RAGQuery,
    RAGResult,
)
from .embeddings import FakeEmbedding, OpenAIEmbedding
from .vectorstore import InMemoryVectorStore

logger = logging.getLogger(__name__)

QueryLike = Union[RAGQuery, dict[str, Any]]
MetadataLike = Union[DocumentMetadata, dict[str, Any]]
FiltersLike = Union[RAGFilters, dict[str, Any]]


class RAGService:
    """Index documents and search them by semantic similarity.

    All dependencies are passed in explicitly; nothing is looked up from
    global state.

    Example:
        ```python
        service = RAGService(embedding=FakeEmbedding())

        await service.index_document(Document(id="1", content="Python is a programming language"))
        result = await service.similarity_search("What is Python?", top_k=3, threshold=0.2)
        ```
    """

    def __init__(
        self,
        embedding: BaseEmbedding,
        vector_store: Optional[BaseVectorStore] = None,
        chunker: Optional[BaseChunker] = None,
        config: Optional[RAGConfig] = None,
    ):
        """Initialize the service.

        Args:
            embedding: Embedding provider for chunks and queries
            vector_store: Vector store (default: InMemoryVectorStore sized to the embedding)
            chunker: Document chunker (default: DocumentChunker from the config)
            config: Chunking, timeout and search defaults (default: RAGConfig())
        """
        self.config = config or RAGConfig()
        self.embedding = embedding
        self.vector_store = vector_store or InMemoryVectorStore(dimension=embedding.dimension)
        self.chunker = chunker or DocumentChunker(self.config.chunk_size, self.config.chunk_overlap)

    async def _embed(self, texts: list[str]) -> list[list[float]]:
        """Embed one batch, turning timeouts and provider errors into EmbeddingError."""
        timeout = self.config.embedding_timeout
        try:
            if timeout is None:
                embeddings = await self.embedding.generate(texts)
            else:
                embeddings = await asyncio.wait_for(self.embedding.generate(texts), timeout)
        except EmbeddingError:
            raise
        except asyncio.TimeoutError as e:
            raise EmbeddingError(f"provider did not respond within {timeout}s") from e
        except Exception as e:
            raise EmbeddingError(str(e)) from e

        if len(embeddings) != len(texts):
            raise EmbeddingError(f"expected {len(texts)} vectors, got {len(embeddings)}")

        dimension = self.embedding.dimension
        for position, embedding in enumerate(embeddings):
            if len(embedding) != dimension:
                raise EmbeddingError(
                    f"vector {position} has length {len(embedding)}, expected {dimension}"
                )
        return embeddings

    async def index_document(self, document: Document) -> int:
        """Chunk, embed and store a single document.

        Chunks are embedded in one batch and stored only after the whole
        batch succeeded, so a failure leaves no chunks of the document behind.

        Returns:
            Number of chunks indexed

        Raises:
            EmbeddingError: If the embedding provider fails
        """
        chunks = self.chunker.chunk_document(document)
        if not chunks:
            logger.debug(f"Document {document.id} produced no chunks")
            return 0

        oversized = [c.id for c in chunks if c.metadata.token_count > self.config.max_tokens_per_chunk]
        if oversized:
            logger.warning(
                f"Document {document.id}: {len(oversized)} chunks exceed "
                f"max_tokens_per_chunk={self.config.max_tokens_per_chunk}"
            )

        embeddings = await self._embed([chunk.content for chunk in chunks])

        embedded: list[DocumentChunk] = [
            chunk.model_copy(update={"embedding": embedding})
            for chunk, embedding in zip(chunks, embeddings)
        ]
        self.vector_store.store(embedded, metadata={document.id: document.metadata})

        logger.debug(f"Indexed document {document.id}: {len(embedded)} chunks")
        return len(embedded)

    async def index_documents(self, documents: list[Document]) -> int:
        """Index documents one after another.

        Returns:
            Total number of chunks indexed
        """
        total = 0
        for document in documents:
            total += await self.index_document(document)

        logger.info(f"Indexed {len(documents)} documents ({total} chunks)")
        return total

    async def index_text(self, text: str, metadata: Optional[MetadataLike] = None) -> int:
        """Index raw text under a generated document id."""
        if metadata is None:
            metadata = DocumentMetadata()
        elif isinstance(metadata, dict):
            metadata = DocumentMetadata.model_validate(metadata)

        document = Document(
            id=f"text_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}",
            content=text,
            metadata=metadata,
        )
        return await self.index_document(document)

    def _resolve_query(self, query: QueryLike) -> RAGQuery:
        if isinstance(query, dict):
            query = RAGQuery.model_validate(query)

        defaults: dict[str, Any] = {}
        if "top_k" not in query.model_fields_set:
            defaults["top_k"] = self.config.top_k
        if "threshold" not in query.model_fields_set:
            defaults["threshold"] = self.config.similarity_threshold
        return query.model_copy(update=defaults) if defaults else query

    async def search(self, query: QueryLike) -> RAGResult:
        """Embed the query text and rank stored chunks against it.

        Args:
            query: A RAGQuery, or a dict in its JSON shape (``topK``,
                ``threshold``, ``filters``). Unset fields take the
                config defaults.
        """
        query = self._resolve_query(query)
        embeddings = await self._embed([query.query])
        return self.vector_store.search(embeddings[0], query)

    async def batch_search(self, queries: list[QueryLike]) -> list[RAGResult]:
        return [await self.search(query) for query in queries]

    async def similarity_search(
        self,
        query: str,
        top_k: Optional[int] = None,
        threshold: Optional[float] = None,
    ) -> RAGResult:
        fields: dict[str, Any] = {"query": query}
        if top_k is not None:
            fields["top_k"] = top_k
        if threshold is not None:
            fields["threshold"] = threshold
        return await self.search(RAGQuery(**fields))

    async def filtered_search(
        self,
        query: str,
        filters: Optional[FiltersLike] = None,
        top_k: Optional[int] = None,
    ) -> RAGResult:
        fields: dict[str, Any] = {"query": query}
        if filters is not None:
            fields["filters"] = RAGFilters.model_validate(filters) if isinstance(filters, dict) else filters
        if top_k is not None:
            fields["top_k"] = top_k
        return await self.search(RAGQuery(**fields))

    async def delete_document(self, document_id: str) -> None:
        """Remove a document's chunks. Unknown ids are ignored."""
        self.vector_store.delete(document_id)
        logger.debug(f"Deleted document {document_id}")

    async def get_stats(self) -> IndexStats:
        return self.vector_store.get_stats()

    async def aclose(self) -> None:
        """Release resources held by the embedding provider, such as HTTP clients."""
        if hasattr(self.embedding, "aclose"):
            await self.embedding.aclose()


def create_rag_service(
    config: Optional[RAGConfig] = None,
    embedding: Optional[BaseEmbedding] = None,
) -> RAGService:
    """Build a RAGService from configuration.

    Args:
        config: Service configuration (default: RAGConfig())
        embedding: Embedding provider overriding ``config.embedding_provider``

    Returns:
        A service backed by an in-memory vector store

    Raises:
        ConfigurationError: If the config asks for an unsupported vector store
    """
    config = config or RAGConfig()

    if config.vector_store_type != "in-memory":
        raise ConfigurationError(f"Unsupported vector store type: {config.vector_store_type}")

    if embedding is None:
        if config.embedding_provider == "openai":
            embedding = OpenAIEmbedding(
                api_key=config.resolve_api_key(),
                base_url=config.embedding_base_url,
                model=config.embedding_model,
                dimensions=config.embedding_dimensions,
                timeout=config.embedding_timeout,
            )
        else:
            embedding = FakeEmbedding(dimension=config.embedding_dimensions or 384)

    return RAGService(
        embedding=embedding,
        vector_store=InMemoryVectorStore(dimension=embedding.dimension),
        config=config,
    )
