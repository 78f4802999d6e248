"""
Evaluation models for MockPrep

Defines the rubric and scoring structures for evaluating a whole interview.
All scores use a single 1-5 scale.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


SCORE_MIN = 1
SCORE_MAX = 5
NEUTRAL_SCORE = 3  # Midpoint of the scale


class ScoreLevel(str, Enum):
    """Qualitative score levels."""

    EXCEPTIONAL = "exceptional"  # 5
    STRONG = "strong"            # 4
    ADEQUATE = "adequate"        # 3
    WEAK = "weak"                # 2
    POOR = "poor"                # 1


class EvaluationSource(str, Enum):
    """Where an evaluation came from."""

    MODEL = "model"        # Parsed from the model response
    FALLBACK = "fallback"  # Neutral substitute after the model failed
    EMPTY = "empty"        # Neutral result for a transcript with no Q&A pairs


class EvaluationResult(BaseModel):
    """Structured evaluation of an interview."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Core dimensions (each 1-5)
    communication: float = Field(
        ..., ge=SCORE_MIN, le=SCORE_MAX,
        description="Clarity, articulation and structure of answers"
    )
    technical_knowledge: float = Field(
        ..., ge=SCORE_MIN, le=SCORE_MAX,
        description="Understanding of the key concepts for the role"
    )
    problem_solving: float = Field(
        ..., ge=SCORE_MIN, le=SCORE_MAX,
        description="Ability to analyze problems and propose solutions"
    )
    confidence: float = Field(
        ..., ge=SCORE_MIN, le=SCORE_MAX,
        description="Confidence and engagement in delivery"
    )
    overall_score: float = Field(
        ..., ge=SCORE_MIN, le=SCORE_MAX,
        description="Overall interview performance"
    )

    # Narrative feedback
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    detailed_feedback: str = ""

    @property
    def level(self) -> ScoreLevel:
        """Get qualitative level from overall score."""
        score = self.overall_score
        if score >= 4.5:
            return ScoreLevel.EXCEPTIONAL
        elif score >= 3.5:
            return ScoreLevel.STRONG
        elif score >= 2.5:
            return ScoreLevel.ADEQUATE
        elif score >= 1.5:
            return ScoreLevel.WEAK
        else:
            return ScoreLevel.POOR

    @classmethod
    def neutral(cls) -> "EvaluationResult":
        """Midpoint evaluation used when the model cannot produce one."""
        return cls(
            communication=NEUTRAL_SCORE,
            technical_knowledge=NEUTRAL_SCORE,
            problem_solving=NEUTRAL_SCORE,
            confidence=NEUTRAL_SCORE,
            overall_score=NEUTRAL_SCORE,
            strengths=["Completed the interview successfully"],
            areas_for_improvement=[
                "Try to provide more detailed responses",
                "Consider adding specific examples to your answers",
            ],
            detailed_feedback=(
                "The interview was completed. "
                "To improve, focus on providing more detailed and specific examples in your responses. "
                "Try to elaborate on your thought process when answering technical questions."
            ),
        )
