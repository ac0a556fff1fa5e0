"""Tool value object — one entry of the server's tool catalog."""

from typing import Any

from pydantic import BaseModel, Field


class Tool(BaseModel, frozen=True):
    """An invocable tool as advertised by the server.

    The name is the join key used to resolve a model's tool call against the
    catalog; the core never mutates a Tool.
    """

    name: str = Field(min_length=1)
    description: str | None = None
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    @property
    def parameter_names(self) -> list[str]:
        """Declared parameter names, in schema declaration order."""
        properties = self.input_schema.get("properties") or {}
        if not isinstance(properties, dict):
            return []
        return list(properties.keys())

    def parameter_schema(self, name: str) -> dict[str, Any]:
        """Return the JSON-schema fragment for one declared parameter ({} if absent)."""
        properties = self.input_schema.get("properties") or {}
        schema = properties.get(name) if isinstance(properties, dict) else None
        return schema if isinstance(schema, dict) else {}


def find_tool(tools: list[Tool], name: str) -> Tool | None:
    """Resolve a tool by name; None when the catalog has no such tool."""
    for tool in tools:
        if tool.name == name:
            return tool
    return None
