from fastapi import APIRouter, Depends, HTTPException
from typing import List
import aiohttp
import logging
from musicmead.models.track_model import TrackSummary
from musicmead.services.spotify_service import SpotifyError, SpotifyService, get_spotify_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/search", response_model=List[TrackSummary])
async def search(
    q: str = "",
    spotify: SpotifyService = Depends(get_spotify_service)
) -> List[TrackSummary]:
    """Search the catalog for tracks matching q"""
    query = q.strip()
    if not query:
        return []

    try:
        return await spotify.search_tracks(query)
    except (SpotifyError, aiohttp.ClientError) as e:
        logger.error(f"Error in /api/search: {str(e)}")
        raise HTTPException(status_code=500, detail="Spotify search failed")
