"""AnalysisObserver port — events emitted while reviewing a tool catalog."""

from typing import Protocol


class AnalysisObserver(Protocol):
    """Observer port for tool review events."""

    def review_started(self, tool_count: int) -> None: ...

    def tool_review_completed(
        self, tool_name: str, risk_count: int, duration_ms: int
    ) -> None: ...

    def tool_review_failed(self, tool_name: str, reason: str) -> None: ...

    def review_completed(self, tool_count: int, risk_count: int) -> None: ...
