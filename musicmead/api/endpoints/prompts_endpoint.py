from fastapi import APIRouter
from typing import Dict
from musicmead.core import config
from musicmead.models.schemas import PlaylistIdsResponse, Prompt

router = APIRouter()

PROMPTS: Dict[str, Prompt] = {
    "wrapped": Prompt(
        key="wrapped",
        title="Wrapped – Most listened to song of the year (no cheating)",
    ),
    "peace": Prompt(
        key="peace",
        title="Passing of the Peace – Your chance to replace the passing of the peace music",
    ),
    "worship": Prompt(
        key="worship",
        title="Worship Slaps – Favorite worship song",
    ),
}


@router.get("/prompts", response_model=Dict[str, Prompt])
async def get_prompts():
    """Title shown above each round's search box"""
    return PROMPTS


@router.get("/playlist-ids", response_model=PlaylistIdsResponse)
async def get_playlist_ids():
    """Playlist ids so the UI can embed the synced playlists"""
    ids = config.playlist_ids()
    return PlaylistIdsResponse(
        wrapped_id=ids["wrapped"] or None,
        peace_id=ids["peace"] or None,
        worship_id=ids["worship"] or None,
    )
