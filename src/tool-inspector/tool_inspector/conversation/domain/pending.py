"""PendingToolCall — a reconstructed tool call awaiting a human decision."""

from typing import Any

from pydantic import BaseModel, Field

from tool_inspector.tools.domain.tool import Tool


class PendingToolCall(BaseModel, frozen=True):
    """A tool call the model asked for, reconstructed from the stream.

    arguments holds the parsed JSON value; it is {} when the streamed
    fragments did not form valid JSON (arguments_malformed=True).
    resolved_tool is None when the catalog has no tool of that name.
    """

    tool_name: str
    tool_call_id: str
    arguments: Any = Field(default_factory=dict)
    resolved_tool: Tool | None = None
    originating_turn_index: int
    arguments_malformed: bool = False
    raw_arguments: str = ""

    @property
    def is_unknown_tool(self) -> bool:
        return self.resolved_tool is None
