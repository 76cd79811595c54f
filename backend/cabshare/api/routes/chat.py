from __future__ import annotations

from fastapi import APIRouter

from ...chat import reply_to
from ...contracts import ChatRequest, ChatResponse

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest) -> ChatResponse:
    """Campus ride assistant; distance questions are answered from the Maps APIs."""
    return ChatResponse(reply=await reply_to(req.messages))


__all__ = ["router"]
