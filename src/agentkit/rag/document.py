"""Document, chunk, query and result data structures for RAG.

Field names are snake_case in Python and camelCase on the wire, so a
``RAGQuery`` can be built straight from a tool call payload and a
``RAGResult`` dumped back with ``model_dump(by_alias=True)``.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DocumentMetadata(_CamelModel):
    """Descriptive metadata for a document.

    Attributes:
        title: Optional human-readable title
        source: Optional origin of the document (file name, system, ...)
        url: Optional URL of the document
        timestamp: When the document was created or captured
        tags: Optional ordered list of tags

    Unknown keys are kept as extra fields.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    title: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)
    tags: Optional[list[str]] = None


class ChunkMetadata(_CamelModel):
    """Position of a chunk inside its document."""

    start_index: int
    end_index: int
    token_count: int


class DocumentChunk(_CamelModel):
    """A chunk of a document, the unit of embedding and retrieval.

    Attributes:
        id: ``"<document_id>_chunk_<ordinal>"``
        document_id: ID of the parent document
        content: Trimmed text of the chunk
        embedding: Embedding vector, set once the chunk has been embedded
        metadata: Character offsets and estimated token count
    """

    id: str
    document_id: str
    content: str
    embedding: Optional[list[float]] = None
    metadata: ChunkMetadata

    def __repr__(self) -> str:
        content_preview = self.content[:30] + "..." if len(self.content) > 30 else self.content
        return f"DocumentChunk(id={self.id!r}, doc_id={self.document_id!r}, content={content_preview!r})"


class Document(_CamelModel):
    """A document to be indexed.

    ``chunks`` is only meaningful before indexing; once indexed, the
    chunks live in the vector store addressed by ``document_id``.
    """

    id: str
    content: str
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    chunks: list[DocumentChunk] = Field(default_factory=list)

    def __repr__(self) -> str:
        content_preview = self.content[:50] + "..." if len(self.content) > 50 else self.content
        return f"Document(id={self.id!r}, content={content_preview!r})"


class DateRange(_CamelModel):
    start: datetime
    end: datetime


class RAGFilters(_CamelModel):
    """Optional restrictions applied to candidate chunks before ranking."""

    tags: Optional[list[str]] = None
    sources: Optional[list[str]] = None
    date_range: Optional[DateRange] = None

    def is_empty(self) -> bool:
        return not self.tags and not self.sources and self.date_range is None


class RAGQuery(_CamelModel):
    """A similarity search request.

    ``threshold`` is not bounded to [0, 1]; a value above 1 matches nothing.
    """

    query: str
    top_k: int = Field(default=5, ge=0)
    threshold: float = 0.7
    filters: Optional[RAGFilters] = None


class ScoredChunk(_CamelModel):
    """A ranked hit.

    ``document`` is a stub carrying the owning document id and, when the
    index retained it, its metadata. Its content is always empty.
    """

    chunk: DocumentChunk
    document: Document
    score: float

    def __repr__(self) -> str:
        return f"ScoredChunk(chunk_id={self.chunk.id!r}, score={self.score:.4f})"


class RAGResult(_CamelModel):
    """Ranked search results.

    ``total_results`` counts every chunk that cleared the threshold,
    including those cut by ``top_k``.
    """

    chunks: list[ScoredChunk] = Field(default_factory=list)
    query: str
    total_results: int = 0


class IndexStats(_CamelModel):
    """Size of the index. ``index_size`` is an estimate in bytes."""

    total_documents: int
    total_chunks: int
    index_size: int

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
