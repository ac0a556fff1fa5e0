"""Abstract stream events — the closed set the accumulator understands."""

from typing import TypeAlias

from pydantic import BaseModel


class TextDelta(BaseModel, frozen=True):
    text: str


class ToolCallStart(BaseModel, frozen=True):
    name: str
    id: str


class ToolCallArgDelta(BaseModel, frozen=True):
    fragment: str


class ToolCallEnd(BaseModel, frozen=True):
    pass


StreamEvent: TypeAlias = TextDelta | ToolCallStart | ToolCallArgDelta | ToolCallEnd
