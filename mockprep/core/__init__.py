"""
Core business logic modules for MockPrep

Contains:
- Transcript segmentation: turns into Q&A pairs
- AI Reasoning: evaluation and question generation
- Evaluation Engine: retry and fallback policy
- Feedback Store: feedback record persistence
- Feedback Orchestrator: the end-of-interview pipeline
"""

from mockprep.core.ai_reasoning import AIReasoningLayer, EvaluationError
from mockprep.core.evaluation_engine import EvaluationEngine, EvaluationFailedError
from mockprep.core.feedback_orchestrator import FeedbackOrchestrator
from mockprep.core.feedback_store import FeedbackStore
from mockprep.core.retry import with_retry
from mockprep.core.transcript import segment_transcript

__all__ = [
    "AIReasoningLayer",
    "EvaluationError",
    "EvaluationEngine",
    "EvaluationFailedError",
    "FeedbackOrchestrator",
    "FeedbackStore",
    "with_retry",
    "segment_transcript",
]
