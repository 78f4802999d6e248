"""
AI Interviewer Prompt Templates

Contains the prompt for generating the questions the voice assistant
will ask during the interview.
"""

from mockprep.models.question import InterviewFocus, QuestionRequest


class InterviewerPrompts:
    """
    Prompt templates for the AI interviewer.

    Questions are read aloud by a voice assistant, so they must be plain
    spoken sentences with no markup or special characters.
    """

    SYSTEM_CONTEXT = """You are an experienced interviewer preparing questions for a job interview.

Guidelines:
- Ask one thing per question
- Keep questions focused and clear
- Prefer scenario-based questions over definitions
- Avoid trivia or obscure tool-specific questions
"""

    FOCUS_GUIDANCE = {
        InterviewFocus.TECHNICAL: "Lean towards technical questions.",
        InterviewFocus.BEHAVIORAL: "Lean towards behavioural questions.",
        InterviewFocus.MIXED: "Balance behavioural and technical questions.",
    }

    RESPONSE_SCHEMA = {
        "type": "array",
        "items": {"type": "string"},
    }

    def generate_questions_prompt(self, request: QuestionRequest) -> str:
        """Generate prompt for creating the interview question set."""

        techstack = ", ".join(request.techstack) if request.techstack else "Not specified"

        prompt = f"""{self.SYSTEM_CONTEXT}

=== INTERVIEW ===
Job Role: {request.role}
Experience Level: {request.level}
Tech Stack: {techstack}
Focus: {self.FOCUS_GUIDANCE[request.focus]}
Number of Questions: {request.amount}

=== YOUR TASK ===
Prepare exactly {request.amount} questions for this interview.
The questions will be read by a voice assistant, so do not use "/" or "*"
or any other special characters which might break the voice assistant.

IMPORTANT: Output ONLY a JSON array of strings, no other text:
["Question 1", "Question 2", "Question 3"]"""

        return prompt
