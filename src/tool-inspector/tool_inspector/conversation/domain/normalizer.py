"""Event normalizer — maps provider stream chunks to abstract stream events.

Chunks may be typed SDK event objects or plain mappings decoded from the
wire; both expose the same field names. Anything outside the handful of
shapes below (message_start, message_delta, ping, thinking deltas, text
block starts, ...) maps to None and is ignored by the accumulator.
"""

from typing import Any

from tool_inspector.conversation.domain.events import (
    StreamEvent,
    TextDelta,
    ToolCallArgDelta,
    ToolCallEnd,
    ToolCallStart,
)


def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def normalize(chunk: Any) -> StreamEvent | None:
    """Map one raw chunk to zero or one abstract event. Never raises."""
    chunk_type = _field(chunk, "type")

    if chunk_type == "content_block_start":
        block = _field(chunk, "content_block")
        if _field(block, "type") != "tool_use":
            return None
        name = _field(block, "name")
        call_id = _field(block, "id")
        if not isinstance(name, str) or not isinstance(call_id, str):
            return None
        return ToolCallStart(name=name, id=call_id)

    if chunk_type == "content_block_delta":
        delta = _field(chunk, "delta")
        delta_type = _field(delta, "type")
        if delta_type == "text_delta":
            text = _field(delta, "text")
            return TextDelta(text=text) if isinstance(text, str) else None
        if delta_type == "input_json_delta":
            fragment = _field(delta, "partial_json")
            if not isinstance(fragment, str):
                return None
            return ToolCallArgDelta(fragment=fragment)
        return None

    if chunk_type == "content_block_stop":
        return ToolCallEnd()

    return None
