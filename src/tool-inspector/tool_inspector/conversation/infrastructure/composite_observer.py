"""CompositeConversationObserver — fans out all events to a list of observers."""

from tool_inspector.conversation.domain.observer import ConversationObserver


class CompositeConversationObserver:
    """Delegates every conversation event to each observer in order.

    Does NOT inherit from ConversationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[ConversationObserver]) -> None:
        self._observers = observers

    def stream_started(self, turn_count: int, tool_count: int) -> None:
        for obs in self._observers:
            obs.stream_started(turn_count=turn_count, tool_count=tool_count)

    def text_delta_applied(self, text: str, content_length: int) -> None:
        for obs in self._observers:
            obs.text_delta_applied(text=text, content_length=content_length)

    def tool_call_started(self, tool_name: str, tool_call_id: str) -> None:
        for obs in self._observers:
            obs.tool_call_started(tool_name=tool_name, tool_call_id=tool_call_id)

    def tool_call_unknown_tool(self, tool_name: str, tool_call_id: str) -> None:
        for obs in self._observers:
            obs.tool_call_unknown_tool(tool_name=tool_name, tool_call_id=tool_call_id)

    def tool_call_arguments_malformed(
        self, tool_name: str, tool_call_id: str, raw_arguments: str, reason: str
    ) -> None:
        for obs in self._observers:
            obs.tool_call_arguments_malformed(
                tool_name=tool_name,
                tool_call_id=tool_call_id,
                raw_arguments=raw_arguments,
                reason=reason,
            )

    def tool_call_reconstructed(
        self, tool_name: str, tool_call_id: str, malformed: bool
    ) -> None:
        for obs in self._observers:
            obs.tool_call_reconstructed(
                tool_name=tool_name, tool_call_id=tool_call_id, malformed=malformed
            )

    def stream_completed(self, content_length: int, tool_calls: int) -> None:
        for obs in self._observers:
            obs.stream_completed(content_length=content_length, tool_calls=tool_calls)

    def stream_failed(self, reason: str) -> None:
        for obs in self._observers:
            obs.stream_failed(reason=reason)
