"""In-memory vector store with exact cosine similarity search."""

import logging
import math
import threading
from datetime import datetime, timezone
from typing import Optional

from agentkit.exceptions import DimensionMismatchError

from .base import BaseVectorStore
from .document import (
    Document,
    DocumentChunk,
    DocumentMetadata,
    IndexStats,
    RAGFilters,
    RAGQuery,
    RAGResult,
    ScoredChunk,
)

logger = logging.getLogger(__name__)

BYTES_PER_FLOAT = 4


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Returns 0.0 for empty vectors or when either vector has zero magnitude.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b))

    dot_product = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return dot_product / (norm_a * norm_b)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def matches_filters(metadata: Optional[DocumentMetadata], filters: Optional[RAGFilters]) -> bool:
    """Check document metadata against query filters.

    Chunks whose document metadata is unknown always pass.
    """
    if filters is None or metadata is None:
        return True

    if filters.tags and not set(filters.tags) & set(metadata.tags or []):
        return False

    if filters.sources and metadata.source not in filters.sources:
        return False

    if filters.date_range is not None:
        timestamp = _as_utc(metadata.timestamp)
        if not _as_utc(filters.date_range.start) <= timestamp <= _as_utc(filters.date_range.end):
            return False

    return True


class InMemoryVectorStore(BaseVectorStore):
    """In-memory vector store for small datasets.

    Keeps chunks keyed by id, the chunk ids of every document, and the
    metadata of documents indexed through :class:`RAGService`. One lock
    guards all three maps so they never disagree: each ``store`` and
    ``delete`` call is atomic, and ``search`` scores a consistent snapshot
    outside the lock so concurrent searches do not serialize.
    """

    def __init__(self, dimension: int = 384) -> None:
        """Initialize the store.

        Args:
            dimension: Embedding dimension, used for the index size estimate
        """
        self.dimension = dimension
        self._chunks: dict[str, DocumentChunk] = {}
        # dict keys keep chunk ids in insertion order
        self._documents: dict[str, dict[str, None]] = {}
        self._metadata: dict[str, DocumentMetadata] = {}
        self._lock = threading.RLock()

    def store(
        self,
        chunks: list[DocumentChunk],
        metadata: Optional[dict[str, DocumentMetadata]] = None,
    ) -> None:
        """Upsert chunks by id; the last write wins."""
        with self._lock:
            for chunk in chunks:
                previous = self._chunks.get(chunk.id)
                if previous is not None and previous.document_id != chunk.document_id:
                    self._forget_chunk(previous)
                self._chunks[chunk.id] = chunk
                self._documents.setdefault(chunk.document_id, {})[chunk.id] = None
            if metadata:
                self._metadata.update(metadata)

        logger.debug(f"Stored {len(chunks)} chunks")

    def _forget_chunk(self, chunk: DocumentChunk) -> None:
        chunk_ids = self._documents.get(chunk.document_id)
        if chunk_ids is None:
            return
        chunk_ids.pop(chunk.id, None)
        if not chunk_ids:
            del self._documents[chunk.document_id]
            self._metadata.pop(chunk.document_id, None)

    def search(self, query_embedding: list[float], query: RAGQuery) -> RAGResult:
        """Rank stored chunks by cosine similarity to ``query_embedding``.

        Chunks without an embedding are skipped. A chunk is a candidate when
        it passes the query filters and its score is at least
        ``query.threshold``. Candidates are sorted by score, highest first,
        with ties kept in insertion order, then cut to ``query.top_k``.

        Raises:
            DimensionMismatchError: If a stored embedding differs in length
                from ``query_embedding``
        """
        filters = query.filters if query.filters is not None and not query.filters.is_empty() else None

        with self._lock:
            snapshot = [
                (chunk, self._metadata.get(chunk.document_id))
                for chunk in self._chunks.values()
                if chunk.embedding is not None
            ]

        candidates: list[ScoredChunk] = []
        for chunk, metadata in snapshot:
            if not matches_filters(metadata, filters):
                continue

            score = cosine_similarity(query_embedding, chunk.embedding)
            if score >= query.threshold:
                candidates.append(ScoredChunk(
                    chunk=chunk,
                    document=self._document_stub(chunk.document_id, metadata),
                    score=score,
                ))

        # list.sort is stable, so equal scores keep insertion order
        candidates.sort(key=lambda c: c.score, reverse=True)

        return RAGResult(
            chunks=candidates[:query.top_k],
            query=query.query,
            total_results=len(candidates),
        )

    @staticmethod
    def _document_stub(document_id: str, metadata: Optional[DocumentMetadata]) -> Document:
        return Document(
            id=document_id,
            content="",
            metadata=metadata.model_copy() if metadata is not None else DocumentMetadata(),
        )

    def delete(self, document_id: str) -> None:
        """Remove every chunk of ``document_id``. Unknown ids are a no-op."""
        with self._lock:
            chunk_ids = self._documents.pop(document_id, None)
            self._metadata.pop(document_id, None)
            if chunk_ids is None:
                return
            for chunk_id in chunk_ids:
                self._chunks.pop(chunk_id, None)

        logger.debug(f"Deleted document {document_id} ({len(chunk_ids)} chunks)")

    def get_stats(self) -> IndexStats:
        with self._lock:
            total_documents = len(self._documents)
            total_chunks = len(self._chunks)

        return IndexStats(
            total_documents=total_documents,
            total_chunks=total_chunks,
            index_size=total_chunks * self.dimension * BYTES_PER_FLOAT,
        )

    def get(self, chunk_id: str) -> Optional[DocumentChunk]:
        """Get a chunk by its ID."""
        with self._lock:
            return self._chunks.get(chunk_id)

    def count(self) -> int:
        """Return the number of chunks."""
        with self._lock:
            return len(self._chunks)

    def clear(self) -> None:
        """Remove all chunks and documents."""
        with self._lock:
            self._chunks.clear()
            self._documents.clear()
            self._metadata.clear()
