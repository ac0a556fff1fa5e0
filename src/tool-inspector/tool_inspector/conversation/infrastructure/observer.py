"""Structlog implementation of the ConversationObserver port."""

import structlog


class StructlogConversationObserver:
    """Delegates conversation domain events to structlog.

    Satisfies the ConversationObserver protocol structurally. Text deltas are
    logged at debug level only; they arrive once per token.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def stream_started(self, turn_count: int, tool_count: int) -> None:
        self._log.info(
            "conversation.stream_started", turn_count=turn_count, tool_count=tool_count
        )

    def text_delta_applied(self, text: str, content_length: int) -> None:
        self._log.debug(
            "conversation.text_delta_applied",
            delta_length=len(text),
            content_length=content_length,
        )

    def tool_call_started(self, tool_name: str, tool_call_id: str) -> None:
        self._log.info(
            "conversation.tool_call_started",
            tool_name=tool_name,
            tool_call_id=tool_call_id,
        )

    def tool_call_unknown_tool(self, tool_name: str, tool_call_id: str) -> None:
        self._log.warning(
            "conversation.tool_call_unknown_tool",
            tool_name=tool_name,
            tool_call_id=tool_call_id,
        )

    def tool_call_arguments_malformed(
        self, tool_name: str, tool_call_id: str, raw_arguments: str, reason: str
    ) -> None:
        self._log.error(
            "conversation.tool_call_arguments_malformed",
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            raw_arguments=raw_arguments,
            reason=reason,
        )

    def tool_call_reconstructed(
        self, tool_name: str, tool_call_id: str, malformed: bool
    ) -> None:
        self._log.info(
            "conversation.tool_call_reconstructed",
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            malformed=malformed,
        )

    def stream_completed(self, content_length: int, tool_calls: int) -> None:
        self._log.info(
            "conversation.stream_completed",
            content_length=content_length,
            tool_calls=tool_calls,
        )

    def stream_failed(self, reason: str) -> None:
        self._log.error("conversation.stream_failed", reason=reason)
