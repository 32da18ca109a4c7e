"""
Configuration for the RAG engine.
"""

import json
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, model_validator

from agentkit.exceptions import ConfigurationError


class RAGConfig(BaseModel):
    """Settings for chunking, embedding and search defaults."""

    # Chunking
    chunk_size: int = 1000
    chunk_overlap: int = 200
    max_tokens_per_chunk: int = 512

    # Embedding provider
    embedding_provider: Literal["mock", "openai"] = "mock"
    embedding_model: str = "text-embedding-3-small"
    embedding_base_url: str = "https://api.openai.com/v1"
    embedding_dimensions: int | None = None
    embedding_timeout: float | None = 30.0
    api_key: str | None = None

    # Vector store and search defaults
    vector_store_type: Literal["in-memory", "chroma", "pinecone"] = "in-memory"
    top_k: int = 5
    similarity_threshold: float = 0.7

    @model_validator(mode="after")
    def _check_chunking(self) -> "RAGConfig":
        if self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.chunk_overlap < 0:
            raise ConfigurationError(f"chunk_overlap must not be negative, got {self.chunk_overlap}")
        if self.chunk_overlap >= self.chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than chunk_size ({self.chunk_size})"
            )
        if self.top_k < 0:
            raise ConfigurationError(f"top_k must not be negative, got {self.top_k}")
        return self

    def resolve_api_key(self) -> str:
        """Return the configured API key, falling back to OPENAI_API_KEY."""
        return self.api_key or os.environ.get("OPENAI_API_KEY", "")

    @classmethod
    def from_yaml(cls, path: Path) -> "RAGConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def from_json(cls, path: Path) -> "RAGConfig":
        """Load configuration from a JSON file."""
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RAGConfig":
        """Load configuration from file (YAML or JSON)."""
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        elif path.suffix == ".json":
            return cls.from_json(path)
        else:
            raise ConfigurationError(f"Unsupported config file format: {path.suffix}")


def load_config(path: str | Path = "agentkit.yaml") -> RAGConfig:
    """
    Load RAG configuration from file.

    Args:
        path: Path to config file

    Returns:
        RAGConfig instance, with defaults when the file does not exist
    """
    path = Path(path)

    if not path.exists():
        return RAGConfig()

    return RAGConfig.from_file(path)
