"""Tests for embedding providers."""

import json

import httpx
import pytest

from agentkit.exceptions import EmbeddingError
from agentkit.rag import DummyEmbedding, FakeEmbedding, OpenAIEmbedding, RandomEmbedding, cosine_similarity


def make_provider(handler, **kwargs) -> OpenAIEmbedding:
    return OpenAIEmbedding(
        api_key="sk-test",
        base_url="https://embeddings.example.com/v1",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestOpenAIEmbedding:
    """Tests for the HTTP embedding provider."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": [
                {"index": 0, "embedding": [0.1, 0.2]},
                {"index": 1, "embedding": [0.3, 0.4]},
            ]})

        provider = make_provider(handler, model="text-embedding-3-small")
        vectors = await provider.generate(["first", "second"])
        await provider.aclose()

        assert seen["method"] == "POST"
        assert seen["url"] == "https://embeddings.example.com/v1/embeddings"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"] == {
            "input": ["first", "second"],
            "model": "text-embedding-3-small",
            "encoding_format": "float",
        }
        assert vectors == [[0.1, 0.2], [0.3, 0.4]]

    @pytest.mark.asyncio
    async def test_requested_dimensions_sent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"data": [{"index": 0, "embedding": [0.5] * 256}]})

        provider = make_provider(handler, model="text-embedding-3-large", dimensions=256)
        vectors = await provider.generate(["text"])
        await provider.aclose()

        assert seen["body"]["dimensions"] == 256
        assert provider.dimension == 256
        assert len(vectors[0]) == 256

    @pytest.mark.asyncio
    async def test_results_reordered_by_index(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": [
                {"index": 1, "embedding": [0.0, 1.0]},
                {"index": 0, "embedding": [1.0, 0.0]},
            ]})

        vectors = await make_provider(handler).generate(["a", "b"])

        assert vectors == [[1.0, 0.0], [0.0, 1.0]]

    @pytest.mark.asyncio
    async def test_embed_query(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": [{"embedding": [0.5, 0.5]}]})

        assert await make_provider(handler).embed_query("q") == [0.5, 0.5]

    @pytest.mark.asyncio
    async def test_empty_batch_makes_no_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        assert await make_provider(handler).generate([]) == []

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": {"message": "rate limited"}})

        with pytest.raises(EmbeddingError, match="429"):
            await make_provider(handler).generate(["a"])

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(EmbeddingError, match="connection refused"):
            await make_provider(handler).generate(["a"])

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(EmbeddingError, match="not valid JSON"):
            await make_provider(handler).generate(["a"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {},
        {"data": "nope"},
        {"data": [{"vector": [1.0]}]},
    ])
    async def test_malformed_body(self, body):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(EmbeddingError):
            await make_provider(handler).generate(["a"])

    @pytest.mark.asyncio
    async def test_too_few_vectors(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": [{"embedding": [1.0]}]})

        with pytest.raises(EmbeddingError, match="expected 2 vectors, got 1"):
            await make_provider(handler).generate(["a", "b"])

    @pytest.mark.parametrize("model, expected", [
        ("text-embedding-3-small", 1536),
        ("text-embedding-3-large", 3072),
        ("text-embedding-ada-002", 1536),
    ])
    def test_dimensions_from_model(self, model, expected):
        provider = OpenAIEmbedding(api_key="k", model=model)
        assert provider.dimension == expected
        assert provider.get_dimensions() == expected

    def test_explicit_dimensions(self):
        assert OpenAIEmbedding(api_key="k", dimensions=256).dimension == 256


class TestLocalEmbeddings:
    """Tests for the test-oriented providers."""

    @pytest.mark.asyncio
    async def test_fake_embedding_is_deterministic(self):
        embedding = FakeEmbedding(dimension=64, seed=42)

        vec1, vec2, vec3 = await embedding.generate(["hello world", "hello world", "goodbye world"])

        assert len(vec1) == 64
        assert vec1 == vec2
        assert vec1 != vec3
        assert all(-1.0 <= v <= 1.0 for v in vec1)
        assert cosine_similarity(vec1, vec2) == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_fake_embedding_seed_changes_vectors(self):
        a = await FakeEmbedding(dimension=8, seed=1).embed_query("text")
        b = await FakeEmbedding(dimension=8, seed=2).embed_query("text")
        assert a != b

    @pytest.mark.asyncio
    async def test_random_embedding(self):
        embedding = RandomEmbedding(dimension=16)

        vectors = await embedding.generate(["a", "b", "c"])

        assert len(vectors) == 3
        assert all(len(v) == 16 for v in vectors)
        assert all(-1.0 <= x <= 1.0 for v in vectors for x in v)

    @pytest.mark.asyncio
    async def test_dummy_embedding(self):
        embedding = DummyEmbedding(dimension=4)

        vectors = await embedding.generate(["a", "b"])

        assert vectors == [[0.0] * 4, [0.0] * 4]
        assert cosine_similarity(vectors[0], vectors[1]) == 0.0
