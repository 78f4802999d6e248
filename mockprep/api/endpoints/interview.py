"""
Interview API endpoints

Handles the setup side of a voice interview:
- Generating the questions the assistant will ask
- Handing the browser the voice assistant configuration
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from mockprep.api.dependencies import get_ai_reasoning, get_current_user_id
from mockprep.config.settings import get_settings
from mockprep.core.ai_reasoning import AIReasoningLayer
from mockprep.core.retry import with_retry
from mockprep.models.question import QuestionRequest, QuestionSet

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class VoiceConfigResponse(BaseModel):
    """Public voice assistant configuration for the browser SDK."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    assistant_id: str
    web_token: str


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/questions", response_model=QuestionSet)
async def generate_questions(
    request: QuestionRequest,
    user_id: str = Depends(get_current_user_id),
    ai_reasoning: AIReasoningLayer = Depends(get_ai_reasoning),
) -> QuestionSet:
    """Generate the questions for a new interview."""
    settings = get_settings()

    try:
        questions = await with_retry(
            lambda: ai_reasoning.generate_questions(request),
            retries=settings.evaluation_retries,
            delay=settings.evaluation_retry_delay_seconds,
            backoff=settings.evaluation_retry_backoff,
            name="Question generation",
        )
    except Exception as e:
        logger.error(f"Question generation failed for user {user_id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to generate questions")

    return QuestionSet(role=request.role, level=request.level, questions=questions)


@router.get("/voice-config", response_model=VoiceConfigResponse)
async def get_voice_config(
    user_id: str = Depends(get_current_user_id),
) -> VoiceConfigResponse:
    """Get the voice assistant id and web token."""
    settings = get_settings()

    if not settings.voice_assistant_id or not settings.voice_web_token:
        raise HTTPException(status_code=503, detail="Voice assistant is not configured")

    return VoiceConfigResponse(
        assistant_id=settings.voice_assistant_id,
        web_token=settings.voice_web_token,
    )
