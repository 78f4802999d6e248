"""
Feedback Record Store for MockPrep

Persists feedback records in a document collection and moves them through
their lifecycle: processing -> completed | error.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from mockprep.core.document_store import DocumentCollection, InMemoryCollection, StoreError
from mockprep.models.evaluation import EvaluationResult, EvaluationSource
from mockprep.models.feedback import FeedbackRecord, FeedbackStatus
from mockprep.models.transcript import TranscriptEntry

logger = logging.getLogger(__name__)


class RecordOwnershipError(StoreError):
    """Raised when a write targets a record that belongs to another user."""
    pass


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeedbackStore:
    """
    Repository for feedback records.

    Nothing here prevents two records for the same interview and user:
    concurrent calls without an explicit record id each allocate their own.
    """

    def __init__(
        self,
        collection: DocumentCollection | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the store.

        Args:
            collection: Backing document collection (in-memory if omitted)
            clock: Source of timestamps
        """
        self.collection = collection if collection is not None else InMemoryCollection()
        self._clock = clock

    # =========================================================================
    # WRITES
    # =========================================================================

    async def create_pending(
        self,
        interview_id: str,
        user_id: str,
        record_id: str | None = None,
        transcript: list[TranscriptEntry] | None = None,
        job_role: str | None = None,
    ) -> str:
        """
        Upsert a record in processing state.

        Reusing an existing ``record_id`` updates that record in place, so the
        call is idempotent for a given id. Evaluation fields already on the
        record are left alone until the next completion.

        Returns:
            The record id

        Raises:
            RecordOwnershipError: If ``record_id`` exists under another user
        """
        record_id = record_id or self.collection.new_key()
        now = self._clock()

        existing = await self.collection.get(record_id)
        if existing is not None and existing.get("user_id") != user_id:
            raise RecordOwnershipError(f"Feedback record {record_id} belongs to another user")

        fields = {
            "id": record_id,
            "interview_id": interview_id.strip(),
            "user_id": user_id,
            "status": FeedbackStatus.PROCESSING.value,
            "error_message": None,
            "job_role": job_role,
            "transcript": [entry.model_dump(mode="json") for entry in transcript or []],
            "updated_at": now,
        }
        if existing is None:
            fields["created_at"] = now

        await self.collection.upsert(record_id, fields, merge=True)
        logger.info(f"Feedback record {record_id} pending for interview {interview_id}")
        return record_id

    async def complete_with_evaluation(
        self,
        record_id: str,
        evaluation: EvaluationResult,
        source: EvaluationSource = EvaluationSource.MODEL,
    ) -> None:
        """Merge the evaluation into the record and mark it completed."""
        now = self._clock()
        fields = evaluation.model_dump(by_alias=False)
        fields.update({
            "status": FeedbackStatus.COMPLETED.value,
            "error_message": None,
            "source": source.value,
            "evaluated_at": now,
            "updated_at": now,
        })
        await self.collection.update(record_id, fields)
        logger.info(f"Feedback record {record_id} completed (source={source.value})")

    async def mark_error(self, record_id: str, message: str) -> None:
        """Mark the record as errored without touching evaluation fields."""
        await self.collection.update(record_id, {
            "status": FeedbackStatus.ERROR.value,
            "error_message": message,
            "updated_at": self._clock(),
        })
        logger.warning(f"Feedback record {record_id} marked as error: {message}")

    # =========================================================================
    # READS
    # =========================================================================

    async def get(self, record_id: str) -> FeedbackRecord | None:
        document = await self.collection.get(record_id)
        return FeedbackRecord.model_validate(document) if document else None

    async def find_by_interview(
        self,
        interview_id: str,
        user_id: str
    ) -> FeedbackRecord | None:
        """
        Find the feedback for an interview.

        If duplicates exist the most recently created one wins.
        """
        documents = await self.collection.find(
            {"interview_id": interview_id.strip(), "user_id": user_id},
            order_by="created_at",
            descending=True,
            limit=1,
        )
        return FeedbackRecord.model_validate(documents[0]) if documents else None

    async def find_latest_for_user(self, user_id: str) -> FeedbackRecord | None:
        """
        Find the user's most recent feedback regardless of interview.

        This is a loose lookup for "show me something" screens. It is not a
        substitute for find_by_interview and must not be used to answer
        whether a given interview has feedback.
        """
        documents = await self.collection.find(
            {"user_id": user_id},
            order_by="created_at",
            descending=True,
            limit=1,
        )
        return FeedbackRecord.model_validate(documents[0]) if documents else None
