"""
Transcript models for MockPrep

A transcript is the ordered list of turns captured by the voice assistant
during an interview call. Order matters: an interviewer turn followed by a
candidate turn forms a question/answer pair.
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


class TranscriptRole(str, Enum):
    """Who spoke a transcript turn."""

    INTERVIEWER = "interviewer"
    CANDIDATE = "candidate"
    SYSTEM = "system"  # Instructions, tool calls and anything else never paired


# Role names emitted by the voice assistant SDK
ROLE_ALIASES: dict[str, TranscriptRole] = {
    "assistant": TranscriptRole.INTERVIEWER,
    "user": TranscriptRole.CANDIDATE,
}


class TranscriptEntry(BaseModel):
    """One turn of the interview conversation."""

    role: TranscriptRole = Field(..., description="Speaker of this turn")
    text: str = Field(
        default="",
        validation_alias=AliasChoices("text", "content"),
        description="What was said",
    )

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ROLE_ALIASES:
                return ROLE_ALIASES[key]
            if key in {role.value for role in TranscriptRole}:
                return key
            # tool, tool_calls and other non-speaker turns
            return TranscriptRole.SYSTEM
        return value

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return "" if value is None else value


class QAPair(BaseModel):
    """An interviewer question matched to the candidate's answer."""

    question: str
    answer: str = ""

    def to_prompt_block(self, number: int) -> str:
        """Render the pair the way the evaluator prompt lists it."""
        answer = self.answer.strip() or "No answer provided"
        return f"Q{number}: {self.question.strip()}\nA: {answer}"
