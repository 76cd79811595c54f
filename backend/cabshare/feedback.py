from __future__ import annotations

import logging
import time

from .contracts import FeedbackCreate, FeedbackRecord
from .storage import FEEDBACK, FeedbackStore

logger = logging.getLogger(__name__)


def submit_feedback(
    payload: FeedbackCreate, *, store: FeedbackStore = FEEDBACK, now_ms: int | None = None
) -> FeedbackRecord:
    """Store a feedback form, keyed by the submitter's name."""
    entry = FeedbackRecord(
        **payload.model_dump(),
        id=payload.name,
        created_at=now_ms if now_ms is not None else int(time.time() * 1000),
    )
    store.upsert(entry)
    logger.info("Feedback received from %s (%d chars)", entry.id, len(entry.message or ""))
    return entry


__all__ = ["submit_feedback"]
