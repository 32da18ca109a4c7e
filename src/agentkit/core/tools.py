"""
Tool definitions used to expose engine operations to agents.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ToolSchema(BaseModel):
    """JSON Schema describing a tool's arguments."""
    type: str = "object"
    properties: dict[str, Any] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)


class ToolResult(BaseModel):
    """Result of a tool execution."""
    tool_name: str
    content: str
    is_error: bool = False


class Tool(BaseModel):
    """A named, schema-described callable an agent can invoke."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    input_schema: ToolSchema = Field(default_factory=ToolSchema)
    handler: Callable[..., Any] | None = Field(default=None, exclude=True)

    def to_api_format(self) -> dict[str, Any]:
        """Convert to the function-calling format used by chat providers."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema.model_dump(),
        }

    async def execute(self, **kwargs: Any) -> ToolResult:
        """Run the handler, turning any failure into an error result."""
        if self.handler is None:
            return ToolResult(tool_name=self.name, content="Tool has no handler", is_error=True)

        missing = [arg for arg in self.input_schema.required if arg not in kwargs]
        if missing:
            return ToolResult(
                tool_name=self.name,
                content=f"Missing required arguments: {', '.join(missing)}",
                is_error=True,
            )

        try:
            result = self.handler(**kwargs)
            if asyncio.iscoroutine(result):
                result = await result
        except Exception as e:
            logger.warning(f"Tool {self.name} failed: {e}")
            return ToolResult(tool_name=self.name, content=f"Error executing tool: {e}", is_error=True)

        return ToolResult(
            tool_name=self.name,
            content=result if isinstance(result, str) else str(result),
        )
