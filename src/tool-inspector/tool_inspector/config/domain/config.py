"""Top-level InspectorConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field

from tool_inspector.config.domain.mcp_server import McpServer
from tool_inspector.config.domain.model import ModelConfig


class InspectorConfig(BaseModel, frozen=True):
    """Root configuration for one inspected MCP server."""

    name: str = Field(min_length=1)
    model: ModelConfig
    mcp_server: McpServer
