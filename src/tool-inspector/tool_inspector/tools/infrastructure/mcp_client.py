"""McpToolClient — tool catalog and execution over the Model Context Protocol."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from mcp import ClientSession, StdioServerParameters
from mcp.client.sse import sse_client
from mcp.client.stdio import stdio_client
from mcp.client.streamable_http import streamable_http_client
from mcp.types import CallToolResult
from mcp.types import Tool as McpTool

from tool_inspector.config.domain.mcp_server import (
    HttpMcpServer,
    McpServer,
    SseMcpServer,
    StdioMcpServer,
)
from tool_inspector.tools.domain.observer import ToolClientObserver
from tool_inspector.tools.domain.result import ToolResult
from tool_inspector.tools.domain.tool import Tool
from tool_inspector.tools.infrastructure.errors import ToolClientError


class McpToolClient:
    """Satisfies both the ToolCatalog and ToolExecutor ports for one MCP server.

    A fresh session is opened per operation, so the client holds no
    connection state between calls.
    """

    def __init__(
        self,
        server: McpServer,
        observer: ToolClientObserver,
        timeout: float = 60.0,
    ) -> None:
        self._server = server
        self._observer = observer
        self._timeout = timeout

    async def list_tools(self) -> list[Tool]:
        """Fetch every tool the server advertises, following pagination cursors.

        Raises:
            ToolClientError: if the server cannot be reached or the request fails.
        """
        tools: list[Tool] = []
        try:
            async with self._session() as session:
                cursor: str | None = None
                while True:
                    if cursor is None:
                        response = await session.list_tools()
                    else:
                        response = await session.list_tools(cursor=cursor)
                    tools.extend(_map_tool(tool) for tool in response.tools)
                    cursor = response.nextCursor
                    if not cursor:
                        break
        except ToolClientError:
            raise
        except Exception as exc:
            raise ToolClientError(operation="list tools", reason=str(exc)) from exc

        self._observer.tools_listed(server_type=self._server.type, count=len(tools))
        return tools

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Invoke one tool and map the protocol result to a ToolResult.

        Raises:
            ToolClientError: if the server cannot be reached or the request fails.
        """
        self._observer.tool_call_started(server_type=self._server.type, tool_name=name)
        start = time.monotonic()
        try:
            async with self._session() as session:
                raw = await session.call_tool(name, arguments)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            self._observer.tool_call_failed(
                server_type=self._server.type, tool_name=name, reason=reason
            )
            raise ToolClientError(
                operation=f"call tool '{name}'", reason=reason
            ) from exc

        result = _map_result(raw)
        self._observer.tool_call_completed(
            server_type=self._server.type,
            tool_name=name,
            duration_ms=int((time.monotonic() - start) * 1000),
            is_error=result.is_error,
        )
        return result

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[ClientSession]:
        """Open and initialize a session on the configured transport."""
        server = self._server
        if isinstance(server, StdioMcpServer):
            params = StdioServerParameters(
                command=server.command,
                args=list(server.args),
                env=dict(server.env) or None,
                cwd=server.cwd,
            )
            async with stdio_client(params) as (read_stream, write_stream):
                async with ClientSession(read_stream, write_stream) as session:
                    await session.initialize()
                    yield session
        elif isinstance(server, SseMcpServer):
            async with sse_client(
                url=server.url, headers=dict(server.headers), timeout=self._timeout
            ) as (read_stream, write_stream):
                async with ClientSession(read_stream, write_stream) as session:
                    await session.initialize()
                    yield session
        elif isinstance(server, HttpMcpServer):
            http_client = httpx.AsyncClient(
                headers=dict(server.headers),
                timeout=httpx.Timeout(self._timeout),
            )
            async with http_client:
                async with streamable_http_client(
                    url=server.url, http_client=http_client
                ) as (read_stream, write_stream, _):
                    async with ClientSession(read_stream, write_stream) as session:
                        await session.initialize()
                        yield session
        else:
            raise ToolClientError(
                operation="open session",
                reason=f"unsupported MCP server type {server.type!r}",
            )


def _map_tool(tool: McpTool) -> Tool:
    return Tool(
        name=tool.name,
        description=tool.description,
        input_schema=dict(tool.inputSchema),
    )


def _map_result(raw: CallToolResult) -> ToolResult:
    return ToolResult(
        content=[
            block.model_dump(mode="json", exclude_none=True) for block in raw.content
        ],
        is_error=bool(raw.isError),
        structured_content=raw.structuredContent,
    )
