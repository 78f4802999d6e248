"""
Evaluation Engine for MockPrep

Runs the AI evaluation of an interview under retry and applies the
fallback policy once retries are exhausted.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from mockprep.config.settings import FallbackPolicy, Settings, get_settings
from mockprep.core.ai_reasoning import AIReasoningLayer
from mockprep.core.retry import with_retry
from mockprep.models.evaluation import EvaluationResult, EvaluationSource
from mockprep.models.transcript import QAPair

logger = logging.getLogger(__name__)


class EvaluationFailedError(Exception):
    """Raised under the strict policy when the evaluator cannot produce a result."""
    pass


class EvaluationEngine:
    """
    Central evaluation component for finished interviews.

    Responsibilities:
    - Short-circuit transcripts with nothing to evaluate
    - Retry the AI evaluator with backoff
    - Degrade to the neutral evaluation, or fail, per the configured policy
    """

    def __init__(
        self,
        ai_reasoning: AIReasoningLayer,
        settings: Settings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize evaluation engine.

        Args:
            ai_reasoning: AI reasoning layer that talks to the model
            settings: Application settings (cached settings if omitted)
            sleep: Awaitable sleep used between retries
        """
        self.ai_reasoning = ai_reasoning
        self.settings = settings or get_settings()
        self._sleep = sleep

    @property
    def policy(self) -> FallbackPolicy:
        return self.settings.fallback_policy

    async def evaluate(
        self,
        pairs: list[QAPair],
        job_role: str,
        trace_id: str | None = None,
    ) -> tuple[EvaluationResult, EvaluationSource]:
        """
        Evaluate an interview.

        Args:
            pairs: Q&A pairs extracted from the transcript
            job_role: Role the candidate interviewed for
            trace_id: Identifier used to group traces

        Returns:
            The evaluation and where it came from

        Raises:
            EvaluationFailedError: If retries are exhausted under the strict policy
        """
        if not pairs:
            logger.info("No Q&A pairs to evaluate, using neutral evaluation")
            return EvaluationResult.neutral(), EvaluationSource.EMPTY

        try:
            evaluation = await with_retry(
                lambda: self.ai_reasoning.evaluate_interview(pairs, job_role, trace_id=trace_id),
                retries=self.settings.evaluation_retries,
                delay=self.settings.evaluation_retry_delay_seconds,
                backoff=self.settings.evaluation_retry_backoff,
                sleep=self._sleep,
                name="Interview evaluation",
            )
        except Exception as e:
            if self.policy == FallbackPolicy.STRICT:
                raise EvaluationFailedError(f"Evaluation failed: {e}") from e

            logger.warning(f"All evaluation retries failed, using neutral evaluation: {e}")
            return EvaluationResult.neutral(), EvaluationSource.FALLBACK

        return evaluation, EvaluationSource.MODEL
