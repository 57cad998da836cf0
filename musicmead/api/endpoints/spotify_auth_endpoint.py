from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, RedirectResponse
from typing import Optional
import aiohttp
import logging
from musicmead.services.spotify_service import SpotifyError, SpotifyService, get_spotify_service

logger = logging.getLogger(__name__)
router = APIRouter()

# One-time setup: visit /auth/login, approve, then copy the refresh token
# printed in the server log into SPOTIFY_REFRESH_TOKEN.


@router.get("/login")
async def spotify_login(spotify: SpotifyService = Depends(get_spotify_service)):
    return RedirectResponse(spotify.get_auth_url())


@router.get("/callback", response_class=PlainTextResponse)
async def spotify_callback(
    code: Optional[str] = None,
    error: Optional[str] = None,
    spotify: SpotifyService = Depends(get_spotify_service)
):
    if error:
        return PlainTextResponse(f"Error from Spotify auth: {error}")
    if not code:
        return PlainTextResponse("Missing authorization code", status_code=400)

    try:
        data = await spotify.exchange_code_for_tokens(code)
    except (SpotifyError, aiohttp.ClientError) as e:
        logger.error(f"Auth callback error: {str(e)}")
        return PlainTextResponse("Auth failed", status_code=500)

    logger.info(f"Your refresh token: {data.get('refresh_token')}")
    return PlainTextResponse(
        "Success! Check your server logs for the refresh token and paste it into .env as SPOTIFY_REFRESH_TOKEN."
    )
