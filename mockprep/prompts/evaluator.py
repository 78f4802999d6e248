"""
AI Evaluator Prompt Templates

Contains the structured prompt for evaluating a finished interview
according to the scoring rubric.

Evaluation dimensions:
- Communication
- Technical Knowledge
- Problem Solving
- Confidence
- Overall
"""

from mockprep.models.transcript import QAPair


class EvaluatorPrompts:
    """
    Prompt templates for AI evaluation of an interview.

    Key principles:
    - Objective, rubric-based scoring on a 1-5 scale
    - Identify both strengths and gaps
    - Provide actionable feedback
    - Deterministic output for the same input
    """

    SYSTEM_CONTEXT = """You are an experienced technical interviewer evaluating a mock interview.

Your role:
- Score the candidate objectively against the rubric
- Identify what the candidate did well
- Note what was missing or could be improved
- Be constructive but honest, do not be lenient
"""

    SCORING_RUBRIC = """
=== SCORING RUBRIC (1-5 scale) ===

COMMUNICATION:
- 5: Exceptionally clear, well-structured, easy to follow
- 3: Understandable but could be clearer
- 1: Very unclear, rambling, incoherent

TECHNICAL KNOWLEDGE:
- 5: Accurate and deep, explains "why" not just "what"
- 3: Partially correct, surface-level understanding
- 1: Mostly incorrect or no real understanding

PROBLEM SOLVING:
- 5: Breaks problems down, weighs trade-offs, proposes sound solutions
- 3: Reaches partial solutions with some guidance
- 1: Unable to reason about the problem

CONFIDENCE:
- 5: Appropriately confident, admits uncertainty when warranted
- 3: Some hesitation, but reasonable
- 1: Extremely uncertain or inappropriately overconfident

OVERALL SCORE:
- Your holistic judgement of the interview on the same 1-5 scale
"""

    RESPONSE_SCHEMA = {
        "type": "object",
        "properties": {
            "communication": {"type": "number"},
            "technicalKnowledge": {"type": "number"},
            "problemSolving": {"type": "number"},
            "confidence": {"type": "number"},
            "overallScore": {"type": "number"},
            "strengths": {"type": "array", "items": {"type": "string"}},
            "areasForImprovement": {"type": "array", "items": {"type": "string"}},
            "detailedFeedback": {"type": "string"},
        },
        "required": [
            "communication",
            "technicalKnowledge",
            "problemSolving",
            "confidence",
            "overallScore",
            "strengths",
            "areasForImprovement",
            "detailedFeedback",
        ],
    }

    def generate_evaluation_prompt(
        self,
        pairs: list[QAPair],
        job_role: str,
    ) -> str:
        """Generate prompt for evaluating an interview."""

        qa_text = "\n\n".join(
            pair.to_prompt_block(i + 1) for i, pair in enumerate(pairs)
        )

        prompt = f"""{self.SYSTEM_CONTEXT}

{self.SCORING_RUBRIC}

=== CONTEXT ===
Role Being Interviewed For: {job_role}

=== INTERVIEW ===
{qa_text}

=== YOUR TASK ===
Evaluate the interview according to the rubric. Every score must be a number from 1 to 5.

IMPORTANT: Output ONLY valid JSON in this exact format, no other text:

{{
    "communication": 3,
    "technicalKnowledge": 3,
    "problemSolving": 3,
    "confidence": 3,
    "overallScore": 3,
    "strengths": ["specific strength 1", "strength 2"],
    "areasForImprovement": ["area 1", "area 2"],
    "detailedFeedback": "Detailed feedback here..."
}}"""

        return prompt
