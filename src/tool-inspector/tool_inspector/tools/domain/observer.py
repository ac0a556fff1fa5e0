"""ToolClientObserver port — events emitted while talking to the tool server."""

from typing import Protocol


class ToolClientObserver(Protocol):
    """Observer port for tool server interactions."""

    def tools_listed(self, server_type: str, count: int) -> None: ...

    def tool_call_started(self, server_type: str, tool_name: str) -> None: ...

    def tool_call_completed(
        self, server_type: str, tool_name: str, duration_ms: int, is_error: bool
    ) -> None: ...

    def tool_call_failed(
        self, server_type: str, tool_name: str, reason: str
    ) -> None: ...
