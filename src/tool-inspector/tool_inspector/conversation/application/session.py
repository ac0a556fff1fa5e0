"""ConversationSession — drives model responses, tool-call approval and the ledger."""

import asyncio
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from tool_inspector.approval.domain.gate import ApprovalGate
from tool_inspector.approval.domain.observer import ApprovalObserver
from tool_inspector.conversation.domain.accumulator import StreamAccumulator
from tool_inspector.conversation.domain.errors import ModelStreamError
from tool_inspector.conversation.domain.ledger import ConversationLedger
from tool_inspector.conversation.domain.observer import ConversationObserver
from tool_inspector.conversation.domain.pending import PendingToolCall
from tool_inspector.conversation.domain.ports import ModelStream
from tool_inspector.conversation.domain.turn import Turn
from tool_inspector.tools.domain.ports import ToolCatalog, ToolExecutor
from tool_inspector.tools.domain.result import ToolResult
from tool_inspector.tools.domain.tool import Tool


class StreamOutcome(BaseModel, frozen=True):
    """What one streamed response produced."""

    text: str
    tool_calls: list[PendingToolCall]


class ApprovalOutcome(BaseModel, frozen=True):
    """The executed tool's result and, if requested, the model's follow-up."""

    result: ToolResult
    response: StreamOutcome | None


class ConversationSession:
    """One conversation against one tool server.

    Owns the ledger, the approval gate and the tool catalog snapshot. Only
    one model stream runs at a time; a second request waits for the first to
    finish. Callers read `ledger` and `gate` but change them only through
    send / approve / reject / edit_arguments.
    """

    def __init__(
        self,
        model_stream: ModelStream,
        catalog: ToolCatalog,
        executor: ToolExecutor,
        observer: ConversationObserver,
        approval_observer: ApprovalObserver,
        tools: list[Tool] | None = None,
    ) -> None:
        self._model_stream = model_stream
        self._catalog = catalog
        self._observer = observer
        self._ledger = ConversationLedger()
        self._gate = ApprovalGate(
            ledger=self._ledger, executor=executor, observer=approval_observer
        )
        self._tools: list[Tool] = list(tools) if tools is not None else []
        self._lock = asyncio.Lock()

    @property
    def ledger(self) -> ConversationLedger:
        return self._ledger

    @property
    def gate(self) -> ApprovalGate:
        return self._gate

    @property
    def tools(self) -> list[Tool]:
        return list(self._tools)

    @property
    def is_streaming(self) -> bool:
        return self._lock.locked()

    async def refresh_tools(self) -> list[Tool]:
        """Replace the catalog snapshot used for call resolution and requests."""
        self._tools = await self._catalog.list_tools()
        return self.tools

    async def send(self, text: str) -> StreamOutcome:
        """Append a user turn and stream the model's response.

        Raises:
            ValueError: if the message is blank.
            ModelStreamError: if the provider stream fails.
        """
        if not text.strip():
            raise ValueError("message must not be blank")
        return await self._respond(user_turn=Turn.user(text.strip()))

    def edit_arguments(self, arguments: Mapping[str, Any]) -> PendingToolCall:
        return self._gate.edit_arguments(arguments)

    async def approve(
        self,
        arguments: Mapping[str, Any] | None = None,
        continue_conversation: bool = True,
    ) -> ApprovalOutcome:
        """Execute the pending call and, by default, let the model see the result.

        Raises:
            NoPendingToolCallError: if nothing is pending.
            ToolExecutionError: if execution fails (the call stays pending).
            ModelStreamError: if the follow-up stream fails.
        """
        result = await self._gate.approve(arguments)
        response = await self._respond() if continue_conversation else None
        return ApprovalOutcome(result=result, response=response)

    def reject(self) -> bool:
        return self._gate.reject()

    async def _respond(self, user_turn: Turn | None = None) -> StreamOutcome:
        async with self._lock:
            if user_turn is not None:
                self._ledger.append(user_turn)

            turns = self._ledger.snapshot()
            accumulator = StreamAccumulator(
                ledger=self._ledger,
                tools=self._tools,
                sink=self._gate,
                observer=self._observer,
            )
            self._observer.stream_started(
                turn_count=len(turns), tool_count=len(self._tools)
            )
            accumulator.begin()
            try:
                async for chunk in self._model_stream.stream(turns, self._tools):
                    batch = chunk if isinstance(chunk, (list, tuple)) else (chunk,)
                    accumulator.feed(batch)
            except ModelStreamError as exc:
                self._observer.stream_failed(reason=exc.reason)
                raise
            finally:
                accumulator.finish()

            self._observer.stream_completed(
                content_length=len(accumulator.text),
                tool_calls=len(accumulator.submitted),
            )
            return StreamOutcome(
                text=accumulator.text, tool_calls=accumulator.submitted
            )
