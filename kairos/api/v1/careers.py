from fastapi import APIRouter, Depends, HTTPException, Request, status

from kairos.ai.types import AIClient
from kairos.api.deps import get_ai_client_dependency
from kairos.catalog import get_default_catalog
from kairos.core.rate_limit import rate_limit
from kairos.matching.themes import extract_themes
from kairos.schemas.catalog import Career
from kairos.schemas.match import (
    CareerMatchRequest,
    CareerMatchResponse,
    CareerRankRequest,
    CareerRankResponse,
)
from kairos.schemas.profile import Ikigai
from kairos.services.match_service import match_career_outcome, rank_careers

router = APIRouter()

INCOMPLETE_PROFILE_DETAIL = "Complete your Ikigai profile (passions, skills, values and interests) first."


def require_complete_profile(profile: Ikigai) -> None:
    if not profile.is_complete():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INCOMPLETE_PROFILE_DETAIL)


@router.get("/careers", response_model=list[Career])
async def list_careers():
    return get_default_catalog().all()


@router.post("/careers/match", response_model=CareerMatchResponse)
@rate_limit()
async def match_career_endpoint(
    request: Request,
    payload: CareerMatchRequest,
    ai: AIClient | None = Depends(get_ai_client_dependency),
):
    _ = request
    require_complete_profile(payload.profile)

    title = payload.career_title.strip()
    details = payload.career_details
    cluster = payload.career_cluster
    known = get_default_catalog().find(title)
    if known is not None:
        title = known.title
        details = details or known.details_text()
        cluster = cluster or known.cluster

    profile_text = payload.profile.to_narrative()
    themes = await extract_themes(profile_text, ai)
    outcome = await match_career_outcome(
        profile_text,
        title,
        details or "",
        cluster,
        ai,
        themes,
    )
    return CareerMatchResponse(
        **outcome.value.model_dump(),
        career_title=title,
        themes=themes,
        source=outcome.source,
    )


@router.post("/careers/rank", response_model=CareerRankResponse)
@rate_limit()
async def rank_careers_endpoint(
    request: Request,
    payload: CareerRankRequest,
    ai: AIClient | None = Depends(get_ai_client_dependency),
):
    _ = request
    require_complete_profile(payload.profile)
    themes, ranked = await rank_careers(
        payload.profile.to_narrative(),
        get_default_catalog().all(),
        limit=payload.limit,
        ai=ai,
    )
    return CareerRankResponse(themes=themes, careers=ranked)
