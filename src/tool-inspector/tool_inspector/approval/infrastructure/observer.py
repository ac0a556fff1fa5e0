"""Structlog implementation of the ApprovalObserver port."""

import structlog


class StructlogApprovalObserver:
    """Delegates approval gate events to structlog.

    Satisfies the ApprovalObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def tool_call_submitted(
        self, tool_name: str, tool_call_id: str, replaced: bool
    ) -> None:
        self._log.info(
            "approval.submitted",
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            replaced=replaced,
        )

    def tool_call_arguments_edited(self, tool_name: str, tool_call_id: str) -> None:
        self._log.info(
            "approval.arguments_edited", tool_name=tool_name, tool_call_id=tool_call_id
        )

    def tool_call_approved(self, tool_name: str, tool_call_id: str) -> None:
        self._log.info(
            "approval.approved", tool_name=tool_name, tool_call_id=tool_call_id
        )

    def tool_call_completed(
        self, tool_name: str, tool_call_id: str, duration_ms: int, is_error: bool
    ) -> None:
        self._log.info(
            "approval.completed",
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            duration_ms=duration_ms,
            is_error=is_error,
        )

    def tool_call_failed(self, tool_name: str, tool_call_id: str, reason: str) -> None:
        self._log.error(
            "approval.failed",
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            reason=reason,
        )

    def tool_call_rejected(self, tool_name: str, tool_call_id: str) -> None:
        self._log.info(
            "approval.rejected", tool_name=tool_name, tool_call_id=tool_call_id
        )
