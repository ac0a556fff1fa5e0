"""FakeModelStream — scripted ModelStream implementation for use in tests."""

from collections.abc import AsyncIterator, Sequence
from typing import Any

from tool_inspector.conversation.domain.turn import Turn
from tool_inspector.tools.domain.tool import Tool


class FakeModelStream:
    """Satisfies the ModelStream protocol. Replays one script per stream() call.

    Each script is a list of chunks; an Exception item is raised at that
    point of the stream. Every request's transcript and tool names are
    recorded in `requests`.
    """

    def __init__(self, scripts: list[list[Any]]) -> None:
        self._scripts = list(scripts)
        self.requests: list[tuple[tuple[Turn, ...], list[str]]] = []

    async def stream(
        self, turns: Sequence[Turn], tools: Sequence[Tool]
    ) -> AsyncIterator[Any]:
        self.requests.append((tuple(turns), [tool.name for tool in tools]))
        script = self._scripts.pop(0) if self._scripts else []
        for item in script:
            if isinstance(item, Exception):
                raise item
            yield item
