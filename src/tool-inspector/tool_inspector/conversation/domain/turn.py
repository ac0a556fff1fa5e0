"""Turn value object — one message unit of a conversation."""

from typing import Literal, TypeAlias

from pydantic import BaseModel

Role: TypeAlias = Literal["user", "assistant"]


class Turn(BaseModel, frozen=True):
    """One message of the transcript.

    Tool results are recorded as assistant turns with is_tool_result=True.
    """

    role: Role
    content: str
    is_tool_result: bool = False

    @classmethod
    def user(cls, content: str) -> "Turn":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str = "") -> "Turn":
        return cls(role="assistant", content=content)

    @classmethod
    def tool_result(cls, content: str) -> "Turn":
        return cls(role="assistant", content=content, is_tool_result=True)

    @property
    def is_in_progress_candidate(self) -> bool:
        """True for plain assistant turns, the only kind a stream may fill in."""
        return self.role == "assistant" and not self.is_tool_result
