"""Structlog implementation of the AnalysisObserver port."""

import structlog


class StructlogAnalysisObserver:
    """Delegates tool review events to structlog.

    Satisfies the AnalysisObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def review_started(self, tool_count: int) -> None:
        self._log.info("analysis.started", tool_count=tool_count)

    def tool_review_completed(
        self, tool_name: str, risk_count: int, duration_ms: int
    ) -> None:
        log = self._log.warning if risk_count else self._log.info
        log(
            "analysis.tool_reviewed",
            tool_name=tool_name,
            risk_count=risk_count,
            duration_ms=duration_ms,
        )

    def tool_review_failed(self, tool_name: str, reason: str) -> None:
        self._log.error(
            "analysis.tool_review_failed", tool_name=tool_name, reason=reason
        )

    def review_completed(self, tool_count: int, risk_count: int) -> None:
        self._log.info(
            "analysis.completed", tool_count=tool_count, risk_count=risk_count
        )
