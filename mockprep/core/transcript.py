"""
Transcript segmentation for MockPrep

Turns the flat list of transcript turns into question/answer pairs.
"""

import logging
from typing import Iterable

from mockprep.models.transcript import QAPair, TranscriptEntry, TranscriptRole

logger = logging.getLogger(__name__)


def segment_transcript(entries: Iterable[TranscriptEntry]) -> list[QAPair]:
    """
    Group transcript turns into Q&A pairs.

    An interviewer turn becomes the pending question, replacing any question
    that went unanswered. A candidate turn answers the pending question and
    clears it; a candidate turn with nothing pending is dropped.

    Args:
        entries: Transcript turns in spoken order

    Returns:
        Q&A pairs in the order they were answered
    """
    pairs: list[QAPair] = []
    pending: str | None = None

    for entry in entries:
        if entry.role == TranscriptRole.INTERVIEWER:
            if entry.text.strip():
                pending = entry.text
        elif entry.role == TranscriptRole.CANDIDATE:
            if pending is not None:
                pairs.append(QAPair(question=pending, answer=entry.text))
                pending = None

    logger.debug(f"Extracted {len(pairs)} Q&A pairs from transcript")
    return pairs
