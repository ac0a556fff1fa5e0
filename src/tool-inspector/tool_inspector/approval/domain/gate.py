"""ApprovalGate — human-in-the-loop checkpoint between a tool call and its execution."""

import asyncio
import time
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from tool_inspector.approval.domain.errors import (
    NoPendingToolCallError,
    ToolExecutionError,
)
from tool_inspector.approval.domain.observer import ApprovalObserver
from tool_inspector.conversation.domain.ledger import ConversationLedger
from tool_inspector.conversation.domain.pending import PendingToolCall
from tool_inspector.conversation.domain.turn import Turn
from tool_inspector.tools.domain.ports import ToolExecutor
from tool_inspector.tools.domain.result import ToolResult


class GateStatus(StrEnum):
    IDLE = "idle"
    AWAITING_APPROVAL = "awaiting_approval"
    RUNNING = "running"


class ApprovalGate:
    """Holds at most one pending tool call until it is approved or rejected.

    submit() overwrites the slot (last writer wins). approve() takes the call
    out of the slot while it runs, so a concurrent reject() has nothing to
    reject. A failed execution puts the call back with the error attached so
    it can be retried, possibly with edited arguments. Approval is not tied
    to the stream that produced the call.
    """

    def __init__(
        self,
        ledger: ConversationLedger,
        executor: ToolExecutor,
        observer: ApprovalObserver,
    ) -> None:
        self._ledger = ledger
        self._executor = executor
        self._observer = observer
        self._pending: PendingToolCall | None = None
        self._running: PendingToolCall | None = None
        self._error: str | None = None

    @property
    def pending(self) -> PendingToolCall | None:
        return self._pending

    @property
    def running(self) -> PendingToolCall | None:
        return self._running

    @property
    def error(self) -> str | None:
        """Message of the last failed execution of the pending call, if any."""
        return self._error

    @property
    def status(self) -> GateStatus:
        """Current gate status.

        RUNNING wins over AWAITING_APPROVAL: while an approved call executes,
        a newer call may already wait in `pending` and status stays RUNNING.
        """
        if self._running is not None:
            return GateStatus.RUNNING
        if self._pending is not None:
            return GateStatus.AWAITING_APPROVAL
        return GateStatus.IDLE

    def submit(self, call: PendingToolCall) -> None:
        """Put a call in the pending slot, replacing any outstanding one."""
        if self._pending == call:
            return
        replaced = self._pending is not None
        self._pending = call
        self._error = None
        self._observer.tool_call_submitted(
            tool_name=call.tool_name,
            tool_call_id=call.tool_call_id,
            replaced=replaced,
        )

    def parameter_names(self) -> list[str]:
        """Declared parameter names of the pending call's tool ([] if unknown)."""
        if self._pending is None or self._pending.resolved_tool is None:
            return []
        return self._pending.resolved_tool.parameter_names

    def draft_arguments(self) -> dict[str, Any]:
        """Editable argument set pre-populated from the declared parameters.

        Parsed values win; a declared parameter the model omitted falls back
        to its schema default when one exists. Extra parsed keys are kept.
        """
        if self._pending is None:
            return {}
        arguments = self._pending.arguments
        parsed = arguments if isinstance(arguments, dict) else {}
        draft: dict[str, Any] = {}
        tool = self._pending.resolved_tool
        if tool is not None:
            for name in tool.parameter_names:
                if name in parsed:
                    draft[name] = parsed[name]
                elif "default" in tool.parameter_schema(name):
                    draft[name] = tool.parameter_schema(name)["default"]
        for name, value in parsed.items():
            draft.setdefault(name, value)
        return draft

    def edit_arguments(self, arguments: Mapping[str, Any]) -> PendingToolCall:
        """Replace the pending call's arguments with a human-edited set.

        Raises:
            NoPendingToolCallError: if nothing is pending.
        """
        if self._pending is None:
            raise NoPendingToolCallError(running=self._running is not None)
        self._pending = self._pending.model_copy(
            update={"arguments": dict(arguments), "arguments_malformed": False}
        )
        self._observer.tool_call_arguments_edited(
            tool_name=self._pending.tool_name,
            tool_call_id=self._pending.tool_call_id,
        )
        return self._pending

    async def approve(self, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Forward the pending call to the executor and record its result.

        arguments, when given, replaces the call's arguments for this and any
        later attempt.

        Raises:
            NoPendingToolCallError: if nothing is pending.
            ToolExecutionError: if the arguments are not a JSON object or the
                executor fails; the call is restored to the slot.
            asyncio.CancelledError: if the approving task is cancelled; the
                call is restored to the slot.
        """
        call = self._pending
        if call is None:
            raise NoPendingToolCallError(running=self._running is not None)
        if arguments is not None:
            call = call.model_copy(update={"arguments": dict(arguments)})

        self._pending = None
        self._running = call
        self._error = None
        self._observer.tool_call_approved(
            tool_name=call.tool_name, tool_call_id=call.tool_call_id
        )

        start = time.monotonic()
        try:
            if not isinstance(call.arguments, dict):
                raise ToolExecutionError(
                    tool_name=call.tool_name,
                    reason="arguments must be a JSON object",
                )
            try:
                result = await self._executor.call_tool(
                    call.tool_name, dict(call.arguments)
                )
            except Exception as exc:
                raise ToolExecutionError(
                    tool_name=call.tool_name, reason=str(exc) or type(exc).__name__
                ) from exc
        except ToolExecutionError as exc:
            self._restore(call=call, reason=exc.reason)
            raise
        except asyncio.CancelledError:
            self._restore(call=call, reason="execution cancelled")
            raise
        finally:
            self._running = None

        self._ledger.append(Turn.tool_result(result.as_text()))
        self._observer.tool_call_completed(
            tool_name=call.tool_name,
            tool_call_id=call.tool_call_id,
            duration_ms=int((time.monotonic() - start) * 1000),
            is_error=result.is_error,
        )
        return result

    def reject(self) -> bool:
        """Drop the pending call without touching the ledger.

        Returns False when there is nothing to reject, including while an
        approved call is running.
        """
        call = self._pending
        if call is None:
            return False
        self._pending = None
        self._error = None
        self._observer.tool_call_rejected(
            tool_name=call.tool_name, tool_call_id=call.tool_call_id
        )
        return True

    def _restore(self, call: PendingToolCall, reason: str) -> None:
        self._observer.tool_call_failed(
            tool_name=call.tool_name, tool_call_id=call.tool_call_id, reason=reason
        )
        if self._pending is None:
            self._pending = call
            self._error = reason
