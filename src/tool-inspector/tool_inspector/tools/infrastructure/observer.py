"""Structlog implementation of the ToolClientObserver port."""

import structlog


class StructlogToolClientObserver:
    """Delegates tool server events to structlog.

    Satisfies the ToolClientObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def tools_listed(self, server_type: str, count: int) -> None:
        self._log.info("tools.listed", server_type=server_type, count=count)

    def tool_call_started(self, server_type: str, tool_name: str) -> None:
        self._log.info(
            "tools.call_started", server_type=server_type, tool_name=tool_name
        )

    def tool_call_completed(
        self, server_type: str, tool_name: str, duration_ms: int, is_error: bool
    ) -> None:
        self._log.info(
            "tools.call_completed",
            server_type=server_type,
            tool_name=tool_name,
            duration_ms=duration_ms,
            is_error=is_error,
        )

    def tool_call_failed(self, server_type: str, tool_name: str, reason: str) -> None:
        self._log.error(
            "tools.call_failed",
            server_type=server_type,
            tool_name=tool_name,
            reason=reason,
        )
