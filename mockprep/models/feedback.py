"""
Feedback record models for MockPrep

A feedback record is the persisted outcome of evaluating one interview's
transcript. It is created in ``processing`` state when the interview ends and
moves to ``completed`` or ``error`` once evaluation finishes.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mockprep.models.evaluation import EvaluationResult, EvaluationSource
from mockprep.models.transcript import TranscriptEntry


class FeedbackStatus(str, Enum):
    """Feedback record lifecycle states."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class FeedbackRecord(BaseModel):
    """Persisted feedback for one interview and user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Identification
    id: str
    interview_id: str
    user_id: str

    # State
    status: FeedbackStatus = FeedbackStatus.PROCESSING
    error_message: str | None = None

    # Input
    job_role: str | None = None
    transcript: list[TranscriptEntry] = Field(default_factory=list)

    # Evaluation (populated once completed)
    communication: float | None = None
    technical_knowledge: float | None = None
    problem_solving: float | None = None
    confidence: float | None = None
    overall_score: float | None = None
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    detailed_feedback: str | None = None
    source: EvaluationSource | None = None

    # Timing
    created_at: datetime
    updated_at: datetime
    evaluated_at: datetime | None = None

    @property
    def evaluation(self) -> EvaluationResult | None:
        """The evaluation held by this record, if it has a complete one."""
        scores = (
            self.communication,
            self.technical_knowledge,
            self.problem_solving,
            self.confidence,
            self.overall_score,
        )
        if any(score is None for score in scores):
            return None
        return EvaluationResult(
            communication=self.communication,
            technical_knowledge=self.technical_knowledge,
            problem_solving=self.problem_solving,
            confidence=self.confidence,
            overall_score=self.overall_score,
            strengths=self.strengths,
            areas_for_improvement=self.areas_for_improvement,
            detailed_feedback=self.detailed_feedback or "",
        )


class FeedbackRequest(BaseModel):
    """Input to feedback generation."""

    interview_id: str
    user_id: str
    transcript: list[TranscriptEntry] | None = None
    record_id: str | None = None
    job_role: str | None = None


class FeedbackResult(BaseModel):
    """Terminal outcome of feedback generation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    record_id: str | None = None
    error: str | None = None
