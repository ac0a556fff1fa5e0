"""ToolResult value object — the outcome of one tool execution."""

import json
from typing import Any

from pydantic import BaseModel, Field


class ToolResult(BaseModel, frozen=True):
    """Content blocks returned by a tool call.

    Blocks are kept as plain mappings (``{"type": "text", "text": ...}``,
    ``{"type": "image", ...}``); the conversation only needs their text form.
    """

    content: list[dict[str, Any]] = Field(default_factory=list)
    is_error: bool = False
    structured_content: dict[str, Any] | None = None

    def as_text(self) -> str:
        """Render the result as ledger text.

        Text blocks contribute their text; any other block is rendered as
        compact JSON. Blocks are joined with newlines.
        """
        parts: list[str] = []
        for block in self.content:
            if block.get("type") == "text":
                parts.append(str(block.get("text", "")))
            else:
                parts.append(json.dumps(block, separators=(",", ":")))
        if not parts and self.structured_content is not None:
            parts.append(json.dumps(self.structured_content, separators=(",", ":")))
        return "\n".join(parts)
