"""SecurityFinding value object — one result of reviewing a tool."""

from enum import StrEnum

from pydantic import BaseModel, Field


class FindingKind(StrEnum):
    IMPORTANT_TAG = "important_tag"
    PROMPT_INJECTION = "prompt_injection"
    ERROR = "error"
    PASSED = "passed"


class SecurityFinding(BaseModel, frozen=True):
    """What the review concluded about one tool.

    A tool yields one PASSED finding, or one or more risk findings. ERROR
    findings (failed or inconclusive model review) count as risks.
    """

    tool_name: str = Field(min_length=1)
    kind: FindingKind
    message: str

    @property
    def is_risk(self) -> bool:
        return self.kind is not FindingKind.PASSED
