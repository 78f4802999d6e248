"""
AI prompt templates for MockPrep

Contains structured prompts for:
- Question generation
- Interview evaluation
"""

from mockprep.prompts.interviewer import InterviewerPrompts
from mockprep.prompts.evaluator import EvaluatorPrompts

__all__ = [
    "InterviewerPrompts",
    "EvaluatorPrompts",
]
