"""
Feedback Orchestrator - turns a finished interview into a feedback record.

This is the only component that talks to the feedback store. It ties
segmentation, evaluation and persistence together and always hands the
caller a terminal success/failure result.
"""

import logging

from mockprep.config.settings import Settings, get_settings
from mockprep.core.document_store import StoreError
from mockprep.core.evaluation_engine import EvaluationEngine, EvaluationFailedError
from mockprep.core.feedback_store import FeedbackStore, RecordOwnershipError
from mockprep.core.transcript import segment_transcript
from mockprep.models.feedback import FeedbackRecord, FeedbackRequest, FeedbackResult

logger = logging.getLogger(__name__)


class FeedbackOrchestrator:
    """
    Coordinates feedback generation.

    Flow:
        validate → create pending record → segment transcript → evaluate
                                                                   ↓
                                                     (completed | error)

    Concurrent calls for the same interview are not serialized; without an
    explicit record id each call creates its own record.
    """

    def __init__(
        self,
        evaluation_engine: EvaluationEngine,
        store: FeedbackStore,
        settings: Settings | None = None,
    ):
        """
        Initialize the orchestrator with component dependencies.

        Args:
            evaluation_engine: Runs the evaluator with retry and fallback
            store: Feedback record persistence
            settings: Application settings (cached settings if omitted)
        """
        self.evaluation_engine = evaluation_engine
        self.store = store
        self.settings = settings or get_settings()

    # =========================================================================
    # GENERATION
    # =========================================================================

    async def generate_feedback(self, request: FeedbackRequest) -> FeedbackResult:
        """
        Generate and persist feedback for an interview.

        Never raises: validation problems, persistence failures and (under
        the strict policy) evaluation failures are all reported through the
        returned result.

        Args:
            request: Interview id, user id, transcript and optional record id

        Returns:
            FeedbackResult with the record id when one was created
        """
        problem = self._validate(request)
        if problem:
            logger.warning(f"Rejected feedback request: {problem}")
            return FeedbackResult(success=False, record_id=None, error=problem)

        job_role = request.job_role or self.settings.default_job_role
        logger.info(
            f"Generating feedback for interview {request.interview_id}, "
            f"user {request.user_id}"
        )

        # 1. Pending record
        try:
            record_id = await self.store.create_pending(
                interview_id=request.interview_id,
                user_id=request.user_id,
                record_id=request.record_id,
                transcript=request.transcript,
                job_role=job_role,
            )
        except RecordOwnershipError as e:
            logger.warning(f"Rejected feedback request from user {request.user_id}: {e}")
            return FeedbackResult(success=False, record_id=None, error="Feedback record not found")
        except StoreError as e:
            logger.error(f"Failed to create feedback record: {e}")
            return FeedbackResult(
                success=False,
                record_id=request.record_id,
                error=f"Failed to save feedback: {e}",
            )

        # 2. Segment
        pairs = segment_transcript(request.transcript)
        logger.info(f"Extracted {len(pairs)} Q&A pairs for record {record_id}")

        # 3. Evaluate
        try:
            evaluation, source = await self.evaluation_engine.evaluate(
                pairs, job_role, trace_id=record_id
            )
        except EvaluationFailedError as e:
            return await self._fail(record_id, str(e))

        # 4. Persist
        try:
            await self.store.complete_with_evaluation(record_id, evaluation, source)
        except StoreError as e:
            logger.error(f"Failed to save evaluation for record {record_id}: {e}")
            return await self._fail(record_id, f"Failed to save evaluation: {e}")

        return FeedbackResult(success=True, record_id=record_id)

    def _validate(self, request: FeedbackRequest) -> str | None:
        if not request.interview_id or not request.interview_id.strip():
            return "Missing required field: interview_id"
        if not request.user_id or not request.user_id.strip():
            return "Missing required field: user_id"
        if request.transcript is None:
            return "Missing required field: transcript"
        return None

    async def _fail(self, record_id: str, message: str) -> FeedbackResult:
        """Mark the record errored (best effort) and build a failure result."""
        try:
            await self.store.mark_error(record_id, message)
        except StoreError as e:
            logger.error(f"Failed to mark record {record_id} as errored: {e}")
        return FeedbackResult(success=False, record_id=record_id, error=message)

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    async def get_feedback(self, interview_id: str, user_id: str) -> FeedbackRecord | None:
        """Get the feedback record for an interview."""
        return await self.store.find_by_interview(interview_id, user_id)

    async def get_latest_feedback(self, user_id: str) -> FeedbackRecord | None:
        """Get the user's most recent feedback record, whatever the interview."""
        return await self.store.find_latest_for_user(user_id)

    async def get_record(self, record_id: str, user_id: str) -> FeedbackRecord | None:
        """Get a record by id, only if it belongs to the user."""
        record = await self.store.get(record_id)
        if record is None or record.user_id != user_id:
            return None
        return record
