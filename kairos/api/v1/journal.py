from fastapi import APIRouter, Depends, Request

from kairos.ai.types import AIClient
from kairos.api.deps import get_ai_client_dependency
from kairos.core.rate_limit import rate_limit
from kairos.schemas.journal import JournalAnalyzeRequest, JournalAnalyzeResponse
from kairos.services.journal_service import analyze_journal_outcome

router = APIRouter()


@router.post("/journal/analyze", response_model=JournalAnalyzeResponse)
@rate_limit()
async def analyze_journal_endpoint(
    request: Request,
    payload: JournalAnalyzeRequest,
    ai: AIClient | None = Depends(get_ai_client_dependency),
):
    _ = request
    outcome = await analyze_journal_outcome(
        payload.journal_text,
        payload.feelings,
        allow_remote_fallback=payload.allow_remote_fallback,
        ai=ai,
    )
    return JournalAnalyzeResponse(**outcome.value.model_dump(), source=outcome.source)
