"""
Data models and schemas for MockPrep

Contains Pydantic models for:
- Interview transcripts and Q&A pairs
- Evaluation results
- Feedback records
- Question generation
"""

from mockprep.models.transcript import TranscriptEntry, TranscriptRole, QAPair
from mockprep.models.evaluation import (
    EvaluationResult,
    EvaluationSource,
    ScoreLevel,
)
from mockprep.models.feedback import (
    FeedbackRecord,
    FeedbackRequest,
    FeedbackResult,
    FeedbackStatus,
)
from mockprep.models.question import InterviewFocus, QuestionRequest, QuestionSet

__all__ = [
    # Transcript
    "TranscriptEntry",
    "TranscriptRole",
    "QAPair",
    # Evaluation
    "EvaluationResult",
    "EvaluationSource",
    "ScoreLevel",
    # Feedback
    "FeedbackRecord",
    "FeedbackRequest",
    "FeedbackResult",
    "FeedbackStatus",
    # Question
    "InterviewFocus",
    "QuestionRequest",
    "QuestionSet",
]
