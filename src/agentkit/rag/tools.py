"""Agent tools exposing a RAGService."""

import json
from typing import Any, Optional

from agentkit.core.tools import Tool, ToolSchema

from .service import RAGService


def create_rag_tools(service: RAGService, prefix: str = "rag") -> list[Tool]:
    """Create the tool set for a RAG service.

    Tool payloads use the camelCase JSON shapes of ``RAGQuery`` and
    ``RAGResult``.

    Args:
        service: Service the tools operate on
        prefix: Prefix for the tool names

    Returns:
        ``<prefix>_search``, ``<prefix>_index_text``,
        ``<prefix>_delete_document`` and ``<prefix>_stats`` tools
    """

    async def search_handler(
        query: str,
        topK: Optional[int] = None,
        threshold: Optional[float] = None,
        filters: Optional[dict[str, Any]] = None,
    ) -> str:
        payload: dict[str, Any] = {"query": query}
        if topK is not None:
            payload["topK"] = topK
        if threshold is not None:
            payload["threshold"] = threshold
        if filters:
            payload["filters"] = filters
        result = await service.search(payload)
        return result.model_dump_json(by_alias=True, exclude={"chunks": {"__all__": {"chunk": {"embedding"}}}})

    async def index_text_handler(text: str, metadata: Optional[dict[str, Any]] = None) -> str:
        count = await service.index_text(text, metadata)
        return json.dumps({"chunksIndexed": count})

    async def delete_handler(documentId: str) -> str:
        await service.delete_document(documentId)
        return json.dumps({"deleted": documentId})

    async def stats_handler() -> str:
        stats = await service.get_stats()
        return json.dumps(stats.to_dict())

    return [
        Tool(
            name=f"{prefix}_search",
            description="Search the knowledge base for chunks similar to a query.",
            input_schema=ToolSchema(
                properties={
                    "query": {"type": "string", "description": "The search query"},
                    "topK": {"type": "integer", "description": "Maximum number of results"},
                    "threshold": {"type": "number", "description": "Minimum similarity score"},
                    "filters": {
                        "type": "object",
                        "description": "Optional tags, sources and dateRange restrictions",
                        "properties": {
                            "tags": {"type": "array", "items": {"type": "string"}},
                            "sources": {"type": "array", "items": {"type": "string"}},
                            "dateRange": {
                                "type": "object",
                                "properties": {
                                    "start": {"type": "string", "format": "date-time"},
                                    "end": {"type": "string", "format": "date-time"},
                                },
                                "required": ["start", "end"],
                            },
                        },
                    },
                },
                required=["query"],
            ),
            handler=search_handler,
        ),
        Tool(
            name=f"{prefix}_index_text",
            description="Add text to the knowledge base.",
            input_schema=ToolSchema(
                properties={
                    "text": {"type": "string", "description": "Text to index"},
                    "metadata": {"type": "object", "description": "Title, source, url, tags, ..."},
                },
                required=["text"],
            ),
            handler=index_text_handler,
        ),
        Tool(
            name=f"{prefix}_delete_document",
            description="Remove a document and all of its chunks from the knowledge base.",
            input_schema=ToolSchema(
                properties={"documentId": {"type": "string", "description": "ID of the document"}},
                required=["documentId"],
            ),
            handler=delete_handler,
        ),
        Tool(
            name=f"{prefix}_stats",
            description="Report the number of indexed documents and chunks.",
            handler=stats_handler,
        ),
    ]
