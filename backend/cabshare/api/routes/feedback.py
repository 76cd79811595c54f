from __future__ import annotations

from fastapi import APIRouter

from ...contracts import FeedbackCreate, FeedbackRecord
from ...feedback import submit_feedback

router = APIRouter(tags=["feedback"])


@router.post("/feedback", response_model=FeedbackRecord, status_code=201)
def feedback_create(payload: FeedbackCreate) -> FeedbackRecord:
    return submit_feedback(payload)


__all__ = ["router"]
