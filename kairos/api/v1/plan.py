import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from kairos.ai.types import AIClient
from kairos.api.deps import get_ai_client_dependency
from kairos.core.rate_limit import rate_limit
from kairos.schemas.plan import ActionPlan, ActionPlanRequest
from kairos.services.plan_service import PlanGenerationError, generate_action_plan, stream_action_plan

router = APIRouter()
logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.post("/plan", response_model=ActionPlan)
@rate_limit()
async def create_plan(
    request: Request,
    payload: ActionPlanRequest,
    ai: AIClient | None = Depends(get_ai_client_dependency),
):
    _ = request
    try:
        return await generate_action_plan(payload.career_goal, payload.details_text(), ai=ai)
    except PlanGenerationError as exc:
        logger.warning("action_plan_failed code=%s: %s", exc.code, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": exc.code, "message": str(exc)},
        ) from exc


@router.post("/plan/stream")
@rate_limit()
async def stream_plan(
    request: Request,
    payload: ActionPlanRequest,
    ai: AIClient | None = Depends(get_ai_client_dependency),
):
    _ = request
    gen = stream_action_plan(payload.career_goal, payload.details_text(), ai=ai)
    return StreamingResponse(gen, media_type="text/event-stream", headers=SSE_HEADERS)
