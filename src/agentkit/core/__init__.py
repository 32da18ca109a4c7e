"""Core abstractions shared with the agent layer."""

from agentkit.core.tools import Tool, ToolResult, ToolSchema

__all__ = ["Tool", "ToolResult", "ToolSchema"]
