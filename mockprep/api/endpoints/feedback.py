"""
Feedback API endpoints

Handles:
- Feedback generation at the end of an interview
- Feedback retrieval
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mockprep.api.dependencies import get_current_user_id, get_orchestrator
from mockprep.core.feedback_orchestrator import FeedbackOrchestrator
from mockprep.models.feedback import FeedbackRecord, FeedbackRequest, FeedbackResult
from mockprep.models.transcript import TranscriptEntry

router = APIRouter()


# ============================================================================
# REQUEST MODELS
# ============================================================================

class GenerateFeedbackRequest(BaseModel):
    """Request model for feedback generation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    interview_id: str
    transcript: list[TranscriptEntry] | None = None
    feedback_id: str | None = Field(default=None, description="Existing record to update")
    job_role: str | None = None


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("", response_model=FeedbackResult)
async def generate_feedback(
    request: GenerateFeedbackRequest,
    user_id: str = Depends(get_current_user_id),
    orchestrator: FeedbackOrchestrator = Depends(get_orchestrator),
) -> FeedbackResult:
    """
    Generate feedback for a finished interview.

    Always answers 200 with a success flag: a successful call does not mean
    the evaluation succeeded.
    """
    return await orchestrator.generate_feedback(
        FeedbackRequest(
            interview_id=request.interview_id,
            user_id=user_id,
            transcript=request.transcript,
            record_id=request.feedback_id,
            job_role=request.job_role,
        )
    )


@router.get("/by-interview/{interview_id}", response_model=FeedbackRecord)
async def get_feedback_by_interview(
    interview_id: str,
    user_id: str = Depends(get_current_user_id),
    orchestrator: FeedbackOrchestrator = Depends(get_orchestrator),
) -> FeedbackRecord:
    """Get the feedback for an interview."""
    record = await orchestrator.get_feedback(interview_id, user_id)
    if not record:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return record


@router.get("/latest", response_model=FeedbackRecord)
async def get_latest_feedback(
    user_id: str = Depends(get_current_user_id),
    orchestrator: FeedbackOrchestrator = Depends(get_orchestrator),
) -> FeedbackRecord:
    """
    Get the user's most recent feedback from any interview.

    Not a fallback for a specific interview: use /by-interview for that.
    """
    record = await orchestrator.get_latest_feedback(user_id)
    if not record:
        raise HTTPException(status_code=404, detail="No feedback yet")
    return record


@router.get("/{record_id}", response_model=FeedbackRecord)
async def get_feedback_record(
    record_id: str,
    user_id: str = Depends(get_current_user_id),
    orchestrator: FeedbackOrchestrator = Depends(get_orchestrator),
) -> FeedbackRecord:
    """Get a feedback record by id, e.g. to poll its status."""
    record = await orchestrator.get_record(record_id, user_id)
    if not record:
        raise HTTPException(status_code=404, detail="Feedback not found")
    return record
