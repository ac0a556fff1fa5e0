"""Conversation ports — the model provider stream and the tool-call sink."""

from collections.abc import AsyncIterator, Sequence
from typing import Any, Protocol

from tool_inspector.conversation.domain.pending import PendingToolCall
from tool_inspector.conversation.domain.turn import Turn
from tool_inspector.tools.domain.tool import Tool


class ModelStream(Protocol):
    """Opens one streamed response for a transcript and tool catalog.

    Yields raw provider chunks in emission order. Implementations raise
    ModelStreamError when the provider errors or the connection drops.
    """

    def stream(
        self, turns: Sequence[Turn], tools: Sequence[Tool]
    ) -> AsyncIterator[Any]: ...


class ToolCallSink(Protocol):
    """Receives each reconstructed tool call (the approval gate)."""

    def submit(self, call: PendingToolCall) -> None: ...
