"""ApprovalObserver port — events emitted by the approval gate."""

from typing import Protocol


class ApprovalObserver(Protocol):
    """Observer port for approval gate events.

    Implementations may log to structlog, render to a console, or record for
    tests.
    """

    def tool_call_submitted(
        self, tool_name: str, tool_call_id: str, replaced: bool
    ) -> None: ...

    def tool_call_arguments_edited(self, tool_name: str, tool_call_id: str) -> None: ...

    def tool_call_approved(self, tool_name: str, tool_call_id: str) -> None: ...

    def tool_call_completed(
        self, tool_name: str, tool_call_id: str, duration_ms: int, is_error: bool
    ) -> None: ...

    def tool_call_failed(
        self, tool_name: str, tool_call_id: str, reason: str
    ) -> None: ...

    def tool_call_rejected(self, tool_name: str, tool_call_id: str) -> None: ...
