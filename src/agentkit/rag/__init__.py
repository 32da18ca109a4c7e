"""RAG (Retrieval-Augmented Generation) engine for agentkit.

Provides fixed-size overlapping chunking, pluggable embedding providers,
an in-memory exact-search vector store, and a service tying them together.

Example:
    ```python
    from agentkit.rag import Document, FakeEmbedding, RAGService

    service = RAGService(embedding=FakeEmbedding())
    await service.index_text("hello world")
    result = await service.similarity_search("hello world", threshold=0.99)
    ```
"""

from .document import (
    ChunkMetadata,
    DateRange,
    Document,
    DocumentChunk,
    DocumentMetadata,
    IndexStats,
    RAGFilters,
    RAGQuery,
    RAGResult,
    ScoredChunk,
)
from .base import BaseChunker, BaseEmbedding, BaseVectorStore
from .chunking import DocumentChunker, estimate_tokens, process_document
from .embeddings import DummyEmbedding, FakeEmbedding, OpenAIEmbedding, RandomEmbedding
from .vectorstore import InMemoryVectorStore, cosine_similarity, matches_filters
from .service import RAGService, create_rag_service
from .tools import create_rag_tools

__all__ = [
    "ChunkMetadata", "DateRange", "Document", "DocumentChunk", "DocumentMetadata",
    "IndexStats", "RAGFilters", "RAGQuery", "RAGResult", "ScoredChunk",
    "BaseChunker", "BaseEmbedding", "BaseVectorStore",
    "DocumentChunker", "estimate_tokens", "process_document",
    "DummyEmbedding", "FakeEmbedding", "OpenAIEmbedding", "RandomEmbedding",
    "InMemoryVectorStore", "cosine_similarity", "matches_filters",
    "RAGService", "create_rag_service", "create_rag_tools",
]
