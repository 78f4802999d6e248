"""
Question generation models for MockPrep
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InterviewFocus(str, Enum):
    """Balance between behavioural and technical questions."""

    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    MIXED = "mixed"


class QuestionRequest(BaseModel):
    """Parameters for generating a set of interview questions."""

    model_config = ConfigDict(populate_by_name=True)

    role: str = Field(..., min_length=1, description="Job role being interviewed for")
    level: str = Field(..., min_length=1, description="Experience level, e.g. junior or senior")
    techstack: list[str] = Field(
        default_factory=list,
        description="Technologies used in the job"
    )
    focus: InterviewFocus = Field(
        default=InterviewFocus.MIXED,
        validation_alias="type",
        description="Which kind of question to lean towards"
    )
    amount: int = Field(default=5, ge=1, le=20, description="Number of questions")

    @field_validator("techstack", mode="before")
    @classmethod
    def split_techstack(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("focus", mode="before")
    @classmethod
    def normalize_focus(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "behavioural":
                return InterviewFocus.BEHAVIORAL
            if value in ("balanced", "mix"):
                return InterviewFocus.MIXED
        return value


class QuestionSet(BaseModel):
    """Questions generated for an interview."""

    role: str
    level: str
    questions: list[str] = Field(default_factory=list)
