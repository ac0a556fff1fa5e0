"""AnthropicModelStream — streams Messages API events for a transcript."""

from collections.abc import AsyncIterator, Sequence
from typing import Any

import anthropic

from tool_inspector.config.domain.model import ModelConfig
from tool_inspector.conversation.domain.errors import ModelStreamError
from tool_inspector.conversation.domain.turn import Turn
from tool_inspector.tools.domain.tool import Tool

_NO_DESCRIPTION = "No description available"


def build_messages(turns: Sequence[Turn]) -> list[dict[str, str]]:
    """Replay the transcript verbatim, skipping turns with no content.

    An assistant turn that only carried a tool call has empty text; the API
    rejects empty content blocks.
    """
    return [
        {"role": turn.role, "content": turn.content}
        for turn in turns
        if turn.content
    ]


def build_tools(tools: Sequence[Tool]) -> list[dict[str, Any]]:
    return [
        {
            "name": tool.name,
            "description": tool.description or _NO_DESCRIPTION,
            "input_schema": tool.input_schema,
        }
        for tool in tools
    ]


class AnthropicModelStream:
    """Satisfies the ModelStream port using the Anthropic async client."""

    def __init__(
        self,
        config: ModelConfig,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self._config = config
        self._client = client or anthropic.AsyncAnthropic(api_key=config.api_key)

    async def stream(
        self, turns: Sequence[Turn], tools: Sequence[Tool]
    ) -> AsyncIterator[Any]:
        """Yield raw stream events for one response.

        Raises:
            ModelStreamError: if the request is refused or the connection drops.
        """
        params: dict[str, Any] = {
            "model": self._config.model,
            "max_tokens": self._config.max_tokens,
            "system": self._config.system_prompt,
            "messages": build_messages(turns),
            "stream": True,
        }
        if tools:
            params["tools"] = build_tools(tools)

        try:
            response = await self._client.messages.create(**params)
            try:
                async for event in response:
                    yield event
            finally:
                await response.close()
        except anthropic.APIStatusError as exc:
            raise ModelStreamError(
                reason=f"{exc.status_code} {exc.message}",
                retriable=exc.status_code == 429 or exc.status_code >= 500,
            ) from exc
        except anthropic.APIError as exc:
            raise ModelStreamError(
                reason=str(exc),
                retriable=isinstance(exc, anthropic.APIConnectionError),
            ) from exc
