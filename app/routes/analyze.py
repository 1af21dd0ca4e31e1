"""
Episode analysis route

Resolves a shared episode link and returns it with a Claude analysis.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends

from app.dependencies import get_episode_analyzer, get_episode_resolver
from app.models.episode import AnalyzeRequest, AnalyzeResponse
from app.services.episode_analyzer import EpisodeAnalyzer
from app.services.episode_resolver import EpisodeResolver
from core.config import Config
from core.errors import InputError, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_episode(
    request: Optional[AnalyzeRequest] = None,
    resolver: EpisodeResolver = Depends(get_episode_resolver),
    analyzer: EpisodeAnalyzer = Depends(get_episode_analyzer),
):
    """
    Analyze a shared podcast episode link

    Args:
        request: Body with the episode URL

    Returns:
        Podcast, episode, description (max 500 chars), image and analysis

    Raises:
        InputError: Missing URL (400)
        ExtractionError: Episode could not be identified (400)
        UpstreamError: Any other failure (500)
    """
    request = request or AnalyzeRequest()
    if not request.url:
        raise InputError("Missing URL")

    logger.info(f"[analyze] Fetching: {request.url}")

    try:
        reference = await resolver.resolve(request.url)
        analysis = await analyzer.analyze(reference)
    except InputError as e:
        logger.warning(f"⚠️ [analyze] {e}")
        raise
    except Exception as e:
        logger.error(f"❌ [analyze] Error: {e}")
        raise UpstreamError(f"Failed to analyze: {e}") from e

    return AnalyzeResponse(
        podcast=reference.podcast,
        episode=reference.episode,
        description=reference.description[:Config.DESCRIPTION_MAX_CHARS],
        image=reference.image,
        analysis=analysis,
    )
