"""Error types raised by the tool server client."""

from tool_inspector.core.errors import ToolInspectorError


class ToolClientError(ToolInspectorError):
    """Raised when the tool server cannot be reached or rejects a request."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        super().__init__(f"Failed to {operation}: {reason}", retriable=True)
