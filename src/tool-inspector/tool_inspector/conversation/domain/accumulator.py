"""StreamAccumulator — reconstructs assistant text and tool calls from one stream.

One accumulator is created per outbound request, so stream state never
leaks from one response into the next.

    IDLE -> STREAMING_TEXT <-> STREAMING_TOOL_ARGS -> TOOL_CALL_READY -> IDLE
"""

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from tool_inspector.conversation.domain.events import (
    StreamEvent,
    TextDelta,
    ToolCallArgDelta,
    ToolCallEnd,
    ToolCallStart,
)
from tool_inspector.conversation.domain.ledger import ConversationLedger
from tool_inspector.conversation.domain.normalizer import normalize
from tool_inspector.conversation.domain.observer import ConversationObserver
from tool_inspector.conversation.domain.pending import PendingToolCall
from tool_inspector.conversation.domain.ports import ToolCallSink
from tool_inspector.conversation.domain.turn import Turn
from tool_inspector.tools.domain.tool import Tool, find_tool


class StreamState(StrEnum):
    IDLE = "idle"
    STREAMING_TEXT = "streaming_text"
    STREAMING_TOOL_ARGS = "streaming_tool_args"
    TOOL_CALL_READY = "tool_call_ready"


@dataclass
class _OpenToolCall:
    """A tool call whose argument fragments are still arriving."""

    name: str
    call_id: str
    resolved_tool: Tool | None
    fragments: list[str] = field(default_factory=list)


class StreamAccumulator:
    """Explicit state machine fed with abstract stream events.

    Text deltas are applied to the in-progress assistant turn of the ledger
    as they arrive. Tool-call argument fragments are buffered and parsed only
    when the call ends; every reconstructed call is handed to the sink, even
    when its arguments failed to parse.
    """

    def __init__(
        self,
        ledger: ConversationLedger,
        tools: Sequence[Tool],
        sink: ToolCallSink,
        observer: ConversationObserver,
    ) -> None:
        self._ledger = ledger
        self._tools = list(tools)
        self._sink = sink
        self._observer = observer

        self._state = StreamState.IDLE
        self._turn_index: int | None = None
        self._content = ""
        self._text = ""
        self._open_call: _OpenToolCall | None = None
        self._submitted: list[PendingToolCall] = []

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def text(self) -> str:
        """All text applied by this stream, in arrival order."""
        return self._text

    @property
    def submitted(self) -> list[PendingToolCall]:
        """Tool calls handed to the sink by this stream, in order."""
        return list(self._submitted)

    @property
    def has_open_tool_call(self) -> bool:
        return self._open_call is not None

    def begin(self) -> None:
        """Append the empty in-progress assistant turn. Idempotent."""
        if self._turn_index is None:
            self._turn_index = self._ledger.append(Turn.assistant())

    def feed(self, chunks: Iterable[Any]) -> list[PendingToolCall]:
        """Normalize and apply a batch of raw chunks strictly in order."""
        submitted: list[PendingToolCall] = []
        for chunk in chunks:
            event = normalize(chunk)
            if event is None:
                continue
            call = self.apply(event)
            if call is not None:
                submitted.append(call)
        return submitted

    def apply(self, event: StreamEvent) -> PendingToolCall | None:
        """Apply one event; returns the call submitted by this transition, if any."""
        self.begin()

        if isinstance(event, TextDelta):
            self._append_text(event.text)
            if self._state in (StreamState.IDLE, StreamState.TOOL_CALL_READY):
                self._state = StreamState.STREAMING_TEXT
            return None

        if isinstance(event, ToolCallStart):
            previous = self._finalize_open_call() if self._open_call else None
            self._open(name=event.name, call_id=event.id)
            return previous

        if isinstance(event, ToolCallArgDelta):
            if self._open_call is not None:
                self._open_call.fragments.append(event.fragment)
            return None

        if isinstance(event, ToolCallEnd):
            if self._open_call is None:
                # content_block_stop also closes text blocks.
                return None
            return self._finalize_open_call()

        return None

    def finish(self) -> PendingToolCall | None:
        """End of source: finalize any open call and return to IDLE."""
        call = self._finalize_open_call() if self._open_call else None
        self._state = StreamState.IDLE
        return call

    def _append_text(self, text: str) -> None:
        self._text += text
        if self._turn_index != len(self._ledger) - 1:
            # A later turn (e.g. an approved tool result) settled the previous
            # assistant turn; continue in a fresh one.
            self._content = ""
            self._turn_index = self._ledger.append(Turn.assistant())
        self._content += text
        self._ledger.replace_last(Turn.assistant(self._content))
        self._observer.text_delta_applied(
            text=text, content_length=len(self._content)
        )

    def _open(self, name: str, call_id: str) -> None:
        resolved = find_tool(self._tools, name)
        self._open_call = _OpenToolCall(
            name=name, call_id=call_id, resolved_tool=resolved
        )
        self._state = StreamState.STREAMING_TOOL_ARGS
        self._observer.tool_call_started(tool_name=name, tool_call_id=call_id)
        if resolved is None:
            self._observer.tool_call_unknown_tool(tool_name=name, tool_call_id=call_id)

    def _finalize_open_call(self) -> PendingToolCall:
        open_call = self._open_call
        assert open_call is not None
        raw = "".join(open_call.fragments)
        arguments, malformed = self._parse_arguments(open_call, raw)

        self._state = StreamState.TOOL_CALL_READY
        assert self._turn_index is not None
        call = PendingToolCall(
            tool_name=open_call.name,
            tool_call_id=open_call.call_id,
            arguments=arguments,
            resolved_tool=open_call.resolved_tool,
            originating_turn_index=self._turn_index,
            arguments_malformed=malformed,
            raw_arguments=raw,
        )
        self._open_call = None
        self._observer.tool_call_reconstructed(
            tool_name=call.tool_name,
            tool_call_id=call.tool_call_id,
            malformed=malformed,
        )
        self._sink.submit(call)
        self._submitted.append(call)
        self._state = StreamState.IDLE
        return call

    def _parse_arguments(self, open_call: _OpenToolCall, raw: str) -> tuple[Any, bool]:
        if not raw.strip():
            return {}, False
        try:
            return json.loads(raw), False
        # Deeply nested input overflows the decoder with RecursionError.
        except (ValueError, RecursionError) as exc:
            self._observer.tool_call_arguments_malformed(
                tool_name=open_call.name,
                tool_call_id=open_call.call_id,
                raw_arguments=raw,
                reason=str(exc),
            )
            return {}, True
