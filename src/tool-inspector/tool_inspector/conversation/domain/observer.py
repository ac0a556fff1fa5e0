"""ConversationObserver port — events emitted while streaming a model response."""

from typing import Protocol


class ConversationObserver(Protocol):
    """Observer port for conversation domain events.

    Implementations may log to structlog, render to a console, or record for
    tests. text_delta_applied fires once per applied delta, in arrival order.
    """

    def stream_started(self, turn_count: int, tool_count: int) -> None: ...

    def text_delta_applied(self, text: str, content_length: int) -> None: ...

    def tool_call_started(self, tool_name: str, tool_call_id: str) -> None: ...

    def tool_call_unknown_tool(self, tool_name: str, tool_call_id: str) -> None: ...

    def tool_call_arguments_malformed(
        self, tool_name: str, tool_call_id: str, raw_arguments: str, reason: str
    ) -> None: ...

    def tool_call_reconstructed(
        self, tool_name: str, tool_call_id: str, malformed: bool
    ) -> None: ...

    def stream_completed(self, content_length: int, tool_calls: int) -> None: ...

    def stream_failed(self, reason: str) -> None: ...
