"""Base exception class for all tool-inspector-specific errors."""


class ToolInspectorError(Exception):
    """Base class for all tool-inspector errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
