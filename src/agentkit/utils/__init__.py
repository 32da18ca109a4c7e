"""Shared utilities for agentkit."""

from agentkit.utils.config import RAGConfig, load_config
from agentkit.utils.logging import get_logger, set_log_level

__all__ = ["RAGConfig", "load_config", "get_logger", "set_log_level"]
