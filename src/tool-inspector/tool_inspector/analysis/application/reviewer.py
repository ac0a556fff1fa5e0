"""ToolReviewer — checks each tool in a catalog for prompt injection."""

import time
from collections.abc import Sequence

from tool_inspector.analysis.domain.finding import FindingKind, SecurityFinding
from tool_inspector.analysis.domain.observer import AnalysisObserver
from tool_inspector.analysis.domain.review import (
    build_question,
    check_important_tags,
    classify_answer,
)
from tool_inspector.conversation.domain.errors import ModelStreamError
from tool_inspector.conversation.domain.events import TextDelta
from tool_inspector.conversation.domain.normalizer import normalize
from tool_inspector.conversation.domain.ports import ModelStream
from tool_inspector.conversation.domain.turn import Turn
from tool_inspector.tools.domain.tool import Tool


class ToolReviewer:
    """Reviews tools one at a time.

    Each tool gets a direct <IMPORTANT>-tag check and a model verdict. The
    model stream is expected to carry REVIEW_SYSTEM_PROMPT as its system
    prompt; the question for each tool is sent as a single user turn with no
    tools attached. A failed model stream becomes an ERROR finding for that
    tool and the review moves on to the next one.
    """

    def __init__(self, model_stream: ModelStream, observer: AnalysisObserver) -> None:
        self._model_stream = model_stream
        self._observer = observer

    async def review(self, tools: Sequence[Tool]) -> list[SecurityFinding]:
        self._observer.review_started(tool_count=len(tools))
        findings: list[SecurityFinding] = []
        for tool in tools:
            findings.extend(await self.review_tool(tool))
        self._observer.review_completed(
            tool_count=len(tools),
            risk_count=sum(1 for finding in findings if finding.is_risk),
        )
        return findings

    async def review_tool(self, tool: Tool) -> list[SecurityFinding]:
        start = time.monotonic()
        findings = check_important_tags(tool)
        try:
            answer = await self._ask(tool)
        except ModelStreamError as exc:
            self._observer.tool_review_failed(tool_name=tool.name, reason=exc.reason)
            findings.append(
                SecurityFinding(
                    tool_name=tool.name,
                    kind=FindingKind.ERROR,
                    message=f"Analysis failed: {exc.reason}",
                )
            )
            return findings

        verdict = classify_answer(tool_name=tool.name, answer=answer)
        if verdict.is_risk or not findings:
            findings.append(verdict)
        self._observer.tool_review_completed(
            tool_name=tool.name,
            risk_count=sum(1 for finding in findings if finding.is_risk),
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return findings

    async def _ask(self, tool: Tool) -> str:
        parts: list[str] = []
        turns = [Turn.user(build_question(tool))]
        async for chunk in self._model_stream.stream(turns, []):
            event = normalize(chunk)
            if isinstance(event, TextDelta):
                parts.append(event.text)
        return "".join(parts)
