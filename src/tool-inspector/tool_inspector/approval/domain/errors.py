"""Error types raised by the approval gate."""

from tool_inspector.core.errors import ToolInspectorError


class NoPendingToolCallError(ToolInspectorError):
    """Raised when approve() or edit_arguments() finds the pending slot empty."""

    def __init__(self, running: bool = False) -> None:
        detail = (
            "an approved call is still running" if running else "nothing is pending"
        )
        super().__init__(f"Failed to approve tool call: {detail}")


class ToolExecutionError(ToolInspectorError):
    """Raised when an approved call fails; the call stays pending for a retry."""

    def __init__(self, tool_name: str, reason: str) -> None:
        self.tool_name = tool_name
        self.reason = reason
        super().__init__(
            f"Failed to execute tool '{tool_name}': {reason}", retriable=True
        )
