"""MCP server connection models — discriminated union on `type` field."""

from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field


class StdioMcpServer(BaseModel, frozen=True):
    """MCP server launched as a subprocess speaking over stdio."""

    type: Literal["stdio"]
    command: str = Field(min_length=1)
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    cwd: str | None = None


class SseMcpServer(BaseModel, frozen=True):
    """MCP server reachable over Server-Sent Events."""

    type: Literal["sse"]
    url: str = Field(min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)


class HttpMcpServer(BaseModel, frozen=True):
    """MCP server reachable over streamable HTTP."""

    type: Literal["http"]
    url: str = Field(min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)


McpServer: TypeAlias = Annotated[
    StdioMcpServer | SseMcpServer | HttpMcpServer,
    Field(discriminator="type"),
]
