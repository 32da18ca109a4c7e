"""Fixed-size overlapping document chunking."""

import math
import uuid
from typing import Any, Optional

from agentkit.exceptions import ConfigurationError

from .base import BaseChunker
from .document import ChunkMetadata, Document, DocumentChunk, DocumentMetadata

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Rough token estimate: one token per four characters."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def validate_chunking(chunk_size: int, chunk_overlap: int) -> None:
    """Reject settings that would not advance through the text."""
    if chunk_size <= 0:
        raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
    if chunk_overlap < 0:
        raise ConfigurationError(f"chunk_overlap must not be negative, got {chunk_overlap}")
    if chunk_overlap >= chunk_size:
        raise ConfigurationError(
            f"chunk_overlap ({chunk_overlap}) must be less than chunk_size ({chunk_size})"
        )


def process_document(
    document: Document,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[DocumentChunk]:
    """Split a document into overlapping windows of ``chunk_size`` characters.

    Windows start every ``chunk_size - chunk_overlap`` characters. The last
    window is the first one that reaches the end of the content, so the
    final chunk always ends at ``len(document.content)``.
    """
    validate_chunking(chunk_size, chunk_overlap)

    content = document.content
    step = chunk_size - chunk_overlap
    chunks: list[DocumentChunk] = []

    start = 0
    while start < len(content):
        end = min(start + chunk_size, len(content))
        window = content[start:end]
        chunks.append(DocumentChunk(
            id=f"{document.id}_chunk_{len(chunks)}",
            document_id=document.id,
            content=window.strip(),
            metadata=ChunkMetadata(
                start_index=start,
                end_index=end,
                token_count=estimate_tokens(window),
            ),
        ))
        if end == len(content):
            break
        start += step

    return chunks


class DocumentChunker(BaseChunker):
    """Chunk documents into fixed-size pieces with overlap.

    Example:
        ```python
        chunker = DocumentChunker(chunk_size=1000, chunk_overlap=200)
        chunks = chunker.chunk_document(Document(id="a", content=text))
        ```
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE, chunk_overlap: int = DEFAULT_CHUNK_OVERLAP):
        """Initialize the chunker.

        Args:
            chunk_size: Maximum characters per chunk
            chunk_overlap: Characters shared by consecutive chunks

        Raises:
            ConfigurationError: If ``chunk_overlap >= chunk_size`` or either is out of range
        """
        validate_chunking(chunk_size, chunk_overlap)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def chunk_document(self, document: Document) -> list[DocumentChunk]:
        return process_document(document, self.chunk_size, self.chunk_overlap)

    def chunk_text(self, text: str, metadata: Optional[dict[str, Any]] = None) -> list[DocumentChunk]:
        """Chunk raw text by wrapping it in a temporary document."""
        document = Document(
            id=f"temp_{uuid.uuid4().hex}",
            content=text,
            metadata=DocumentMetadata(**(metadata or {})),
        )
        return self.chunk_document(document)
