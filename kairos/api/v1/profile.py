from fastapi import APIRouter, Depends, Request

from kairos.ai.types import AIClient
from kairos.api.deps import get_ai_client_dependency
from kairos.core.rate_limit import rate_limit
from kairos.matching.themes import extract_themes
from kairos.schemas.profile import ThemesRequest, ThemesResponse

router = APIRouter()


@router.post("/profile/themes", response_model=ThemesResponse)
@rate_limit()
async def profile_themes(
    request: Request,
    payload: ThemesRequest,
    ai: AIClient | None = Depends(get_ai_client_dependency),
):
    _ = request
    themes = await extract_themes(payload.profile.to_narrative(), ai)
    return ThemesResponse(themes=themes)
