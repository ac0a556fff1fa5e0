"""Tests for CompositeConversationObserver."""

from tests.conversation.fake_observer import FakeConversationObserver
from tool_inspector.conversation.infrastructure.composite_observer import (
    CompositeConversationObserver,
)


def _make_composite(
    *observers: FakeConversationObserver,
) -> CompositeConversationObserver:
    return CompositeConversationObserver(observers=list(observers))


class TestCompositeConversationObserverFanOut:
    """Every event is forwarded to all observers in order."""

    def test_stream_started_forwarded_to_all(self) -> None:
        obs_a = FakeConversationObserver()
        obs_b = FakeConversationObserver()
        composite = _make_composite(obs_a, obs_b)

        composite.stream_started(turn_count=3, tool_count=2)

        assert obs_a.started[0].turn_count == 3
        assert obs_b.started[0].tool_count == 2

    def test_text_delta_forwarded_to_all(self) -> None:
        obs_a = FakeConversationObserver()
        obs_b = FakeConversationObserver()
        composite = _make_composite(obs_a, obs_b)

        composite.text_delta_applied(text="Hi", content_length=2)

        assert obs_a.text_deltas[0].text == "Hi"
        assert obs_b.text_deltas[0].content_length == 2

    def test_tool_call_events_preserve_all_fields(self) -> None:
        obs = FakeConversationObserver()
        composite = _make_composite(obs)

        composite.tool_call_started(tool_name="get_weather", tool_call_id="1")
        composite.tool_call_unknown_tool(tool_name="rm", tool_call_id="2")
        composite.tool_call_arguments_malformed(
            tool_name="rm", tool_call_id="2", raw_arguments="{bad", reason="eof"
        )
        composite.tool_call_reconstructed(
            tool_name="rm", tool_call_id="2", malformed=True
        )

        assert obs.tool_calls_started[0].tool_name == "get_weather"
        assert obs.unknown_tools[0].tool_call_id == "2"
        assert obs.malformed[0].raw_arguments == "{bad"
        assert obs.malformed[0].reason == "eof"
        assert obs.reconstructed[0].malformed is True

    def test_stream_end_events_forwarded_to_all(self) -> None:
        obs_a = FakeConversationObserver()
        obs_b = FakeConversationObserver()
        composite = _make_composite(obs_a, obs_b)

        composite.stream_completed(content_length=10, tool_calls=1)
        composite.stream_failed(reason="eof")

        for obs in (obs_a, obs_b):
            assert obs.completed[0].tool_calls == 1
            assert obs.failed == ["eof"]

    def test_empty_composite_is_a_no_op(self) -> None:
        composite = _make_composite()

        composite.stream_started(turn_count=0, tool_count=0)
        composite.stream_failed(reason="x")
