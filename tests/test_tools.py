"""Tests for the RAG agent tools."""

import json

import pytest

from agentkit.core.tools import Tool, ToolSchema
from agentkit.rag import FakeEmbedding, RAGService, create_rag_tools


@pytest.fixture
def tools(service):
    return {tool.name: tool for tool in create_rag_tools(service)}


class TestCreateRAGTools:
    """Tests for tool creation."""

    def test_tool_names(self, tools):
        assert set(tools) == {"rag_search", "rag_index_text", "rag_delete_document", "rag_stats"}

    def test_custom_prefix(self):
        service = RAGService(embedding=FakeEmbedding(dimension=8))
        names = [tool.name for tool in create_rag_tools(service, prefix="kb")]

        assert names == ["kb_search", "kb_index_text", "kb_delete_document", "kb_stats"]

    def test_search_schema(self, tools):
        api = tools["rag_search"].to_api_format()

        assert api["name"] == "rag_search"
        assert "knowledge base" in api["description"]
        assert api["input_schema"]["required"] == ["query"]
        assert set(api["input_schema"]["properties"]) == {"query", "topK", "threshold", "filters"}


class TestToolExecution:
    """Tests for running the tools against a service."""

    @pytest.mark.asyncio
    async def test_index_then_search(self, tools):
        indexed = await tools["rag_index_text"].execute(text="hello world", metadata={"source": "greetings"})
        assert not indexed.is_error
        assert json.loads(indexed.content) == {"chunksIndexed": 1}

        result = await tools["rag_search"].execute(query="hello world", threshold=0.99, topK=3)

        assert not result.is_error
        payload = json.loads(result.content)
        assert payload["query"] == "hello world"
        assert payload["totalResults"] == 1
        hit = payload["chunks"][0]
        assert hit["score"] == pytest.approx(1.0)
        assert hit["chunk"]["documentId"].startswith("text_")
        assert "embedding" not in hit["chunk"]
        assert hit["document"]["content"] == ""
        assert hit["document"]["metadata"]["source"] == "greetings"

    @pytest.mark.asyncio
    async def test_search_with_filters(self, tools):
        await tools["rag_index_text"].execute(text="hello world", metadata={"source": "a"})

        result = await tools["rag_search"].execute(
            query="hello world", threshold=0.99, filters={"sources": ["b"]},
        )

        assert json.loads(result.content)["totalResults"] == 0

    @pytest.mark.asyncio
    async def test_stats_and_delete(self, tools, service):
        await service.index_text("hello world")
        document_id = (await service.similarity_search("hello world", threshold=0.99)).chunks[0].chunk.document_id

        stats = json.loads((await tools["rag_stats"].execute()).content)
        assert stats == {"totalDocuments": 1, "totalChunks": 1, "indexSize": 64 * 4}

        deleted = await tools["rag_delete_document"].execute(documentId=document_id)
        assert json.loads(deleted.content) == {"deleted": document_id}
        assert (await service.get_stats()).total_chunks == 0

    @pytest.mark.asyncio
    async def test_missing_argument(self, tools):
        result = await tools["rag_search"].execute()

        assert result.is_error
        assert "query" in result.content

    @pytest.mark.asyncio
    async def test_failure_becomes_error_result(self, failing_embedding):
        tool = {t.name: t for t in create_rag_tools(RAGService(embedding=failing_embedding))}["rag_search"]

        result = await tool.execute(query="anything")

        assert result.is_error
        assert "provider unavailable" in result.content


class TestTool:
    @pytest.mark.asyncio
    async def test_tool_without_handler(self):
        tool = Tool(name="noop", description="does nothing")

        result = await tool.execute()

        assert result.is_error
        assert result.tool_name == "noop"

    @pytest.mark.asyncio
    async def test_sync_handler_result_stringified(self):
        tool = Tool(
            name="add",
            description="add numbers",
            input_schema=ToolSchema(properties={"a": {"type": "integer"}}, required=["a"]),
            handler=lambda a: a + 1,
        )

        result = await tool.execute(a=1)

        assert result.content == "2"
        assert not result.is_error
