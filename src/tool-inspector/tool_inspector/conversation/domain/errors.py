"""Error types raised by the conversation domain."""

from tool_inspector.core.errors import ToolInspectorError


class LedgerError(ToolInspectorError):
    """Raised when a ledger operation would rewrite settled history."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to update conversation ledger: {reason}")


class ModelStreamError(ToolInspectorError):
    """Raised when the model provider stream errors or closes unexpectedly.

    Assistant text applied before the failure is kept in the ledger.
    """

    def __init__(self, reason: str, retriable: bool = False) -> None:
        self.reason = reason
        super().__init__(f"Failed to stream model response: {reason}", retriable)
