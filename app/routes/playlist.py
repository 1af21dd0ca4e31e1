"""
Playlist generation route
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends

from app.dependencies import get_playlist_builder
from app.models.playlist import PlaylistRequest
from app.services.playlist_builder import PlaylistBuilder
from core.errors import InputError, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/playlist")
async def generate_playlist(
    request: Optional[PlaylistRequest] = None,
    builder: PlaylistBuilder = Depends(get_playlist_builder),
):
    """
    Generate a duration-targeted playlist enriched with Listen Notes links

    Args:
        request: Body with the refined prompt and durationMinutes

    Returns:
        Playlist object (camelCase keys, as emitted by the model)
    """
    request = request or PlaylistRequest()
    if not request.prompt:
        raise InputError("Missing prompt")

    logger.info(f"[playlist] Generating for: \"{request.prompt[:80]}...\" ({request.duration_minutes} min)")

    try:
        playlist = await builder.build(request.prompt, request.duration_minutes)
    except Exception as e:
        logger.error(f"❌ [playlist] Error: {e}")
        raise UpstreamError(f"Failed to generate playlist: {e}") from e

    return playlist.to_response()
