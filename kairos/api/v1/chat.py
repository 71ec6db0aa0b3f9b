from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from kairos.ai.types import AIClient
from kairos.api.deps import get_ai_client_dependency
from kairos.core.rate_limit import rate_limit
from kairos.schemas.chat import ChatRequest
from kairos.services.chat_service import stream_chat

router = APIRouter()


@router.post("/chat/stream")
@rate_limit()
async def chat_stream(
    request: Request,
    payload: ChatRequest,
    ai: AIClient | None = Depends(get_ai_client_dependency),
):
    _ = request
    gen = stream_chat(payload.messages, ikigai=payload.ikigai, ai=ai)

    return StreamingResponse(
        gen,
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
