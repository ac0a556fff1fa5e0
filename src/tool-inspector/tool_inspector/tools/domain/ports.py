"""Tool collaborator ports — catalog source and execution transport."""

from typing import Any, Protocol

from tool_inspector.tools.domain.result import ToolResult
from tool_inspector.tools.domain.tool import Tool


class ToolCatalog(Protocol):
    """Source of the invocable tool list."""

    async def list_tools(self) -> list[Tool]: ...


class ToolExecutor(Protocol):
    """Executes one tool call.

    Implementations raise on transport or protocol failure; a tool that ran
    and reported an error returns a ToolResult with is_error=True instead.
    """

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult: ...
