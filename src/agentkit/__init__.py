"""
agentkit - retrieval engine for LLM agents.
"""

from agentkit.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingError,
    RAGError,
)
from agentkit.core.tools import Tool, ToolResult
from agentkit.utils.config import RAGConfig, load_config
from agentkit.rag import (
    # Data structures
    Document,
    DocumentChunk,
    DocumentMetadata,
    RAGQuery,
    RAGResult,
    IndexStats,
    # Embeddings
    FakeEmbedding,
    OpenAIEmbedding,
    # Storage and service
    InMemoryVectorStore,
    DocumentChunker,
    RAGService,
    create_rag_service,
    create_rag_tools,
)

__version__ = "0.1.0"
__all__ = [
    # Errors
    "RAGError",
    "ConfigurationError",
    "DimensionMismatchError",
    "EmbeddingError",
    # Tools and config
    "Tool",
    "ToolResult",
    "RAGConfig",
    "load_config",
    # RAG
    "Document",
    "DocumentChunk",
    "DocumentMetadata",
    "RAGQuery",
    "RAGResult",
    "IndexStats",
    "FakeEmbedding",
    "OpenAIEmbedding",
    "InMemoryVectorStore",
    "DocumentChunker",
    "RAGService",
    "create_rag_service",
    "create_rag_tools",
]
