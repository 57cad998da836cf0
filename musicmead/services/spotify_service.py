import base64
import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import aiohttp

from musicmead.core import config
from musicmead.models.submission_model import ROUND_KEYS, Submission
from musicmead.models.track_model import TrackSummary

logger = logging.getLogger(__name__)

# Spotify accepts at most 100 URIs per playlist tracks call
PLAYLIST_PAGE_SIZE = 100
# Refresh the access token this many seconds before it actually expires
TOKEN_EXPIRY_MARGIN = 60
AUTH_SCOPES = ["playlist-modify-public", "playlist-modify-private"]


class SpotifyError(Exception):
    """Base class for catalog client errors"""


class SpotifyConfigError(SpotifyError):
    """Credentials or playlist ids are missing"""


class SpotifyAPIError(SpotifyError):
    def __init__(self, status: int, message: str):
        super().__init__(f"Spotify API error {status}: {message}")
        self.status = status
        self.message = message


def chunk_uris(uris: List[str], size: int = PLAYLIST_PAGE_SIZE) -> List[List[str]]:
    return [uris[i:i + size] for i in range(0, len(uris), size)]


def collect_round_uris(submissions: List[Submission]) -> Dict[str, List[str]]:
    """Track URIs picked for each round, in submission order"""
    uris: Dict[str, List[str]] = {key: [] for key in ROUND_KEYS}
    for submission in submissions:
        for key in ROUND_KEYS:
            track = getattr(submission.rounds, key)
            if track and track.uri:
                uris[key].append(track.uri)
    return uris


class SpotifyService:
    """Client for the parts of the Spotify Web API the picks app needs"""

    def __init__(self):
        self._access_token: Optional[str] = None
        self._access_token_expires_at: float = 0.0

    @staticmethod
    def _basic_auth_header() -> str:
        credentials = f"{config.SPOTIFY_CLIENT_ID}:{config.SPOTIFY_CLIENT_SECRET}"
        return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        """Send one request and return the decoded JSON body (None when empty)"""
        async with aiohttp.ClientSession() as session:
            async with session.request(method, url, **kwargs) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(f"Spotify {method} {url} failed: {response.status}, {error_text}")
                    raise SpotifyAPIError(response.status, error_text)
                if response.status == 204 or response.content_length == 0:
                    return None
                return await response.json(content_type=None)

    async def _token_request(self, form: Dict[str, str]) -> Dict[str, Any]:
        headers = {
            "Authorization": self._basic_auth_header(),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        return await self._request(
            "POST",
            f"{config.SPOTIFY_ACCOUNTS_URL}/api/token",
            data=form,
            headers=headers,
        )

    async def get_access_token(self) -> str:
        """Return the cached access token, refreshing it when close to expiry"""
        now = time.time()
        if self._access_token and now < self._access_token_expires_at - TOKEN_EXPIRY_MARGIN:
            return self._access_token

        if not config.SPOTIFY_REFRESH_TOKEN:
            raise SpotifyConfigError("SPOTIFY_REFRESH_TOKEN is not set. Run the auth flow first.")

        logger.info("Refreshing Spotify access token")
        data = await self._token_request({
            "grant_type": "refresh_token",
            "refresh_token": config.SPOTIFY_REFRESH_TOKEN,
        })
        self._access_token = data["access_token"]
        self._access_token_expires_at = time.time() + int(data.get("expires_in", 3600))
        return self._access_token

    async def _api_request(self, method: str, path: str, **kwargs) -> Any:
        token = await self.get_access_token()
        headers = {"Authorization": f"Bearer {token}"}
        return await self._request(method, f"{config.SPOTIFY_API_URL}{path}", headers=headers, **kwargs)

    async def search_tracks(self, query: str, limit: int = 10) -> List[TrackSummary]:
        data = await self._api_request(
            "GET",
            "/search",
            params={"q": query, "type": "track", "limit": str(limit)},
        )
        items = (data or {}).get("tracks", {}).get("items", [])
        results = []
        for item in items:
            images = item.get("album", {}).get("images") or []
            results.append(TrackSummary(
                id=item["id"],
                uri=item["uri"],
                name=item["name"],
                artists=", ".join(a["name"] for a in item.get("artists", [])),
                album=item.get("album", {}).get("name", ""),
                image=images[0].get("url") if images else None,
            ))
        logger.info(f"Spotify search for {query!r} returned {len(results)} tracks")
        return results

    async def replace_playlist_tracks(self, playlist_id: str, uris: List[str]) -> None:
        """
        Replace a playlist's contents with uris.

        The first page goes through the replace call and the rest are appended
        page by page. An empty list clears the playlist. Nothing is rolled
        back if a later page fails.
        """
        path = f"/playlists/{playlist_id}/tracks"
        pages = chunk_uris(uris) or [[]]

        await self._api_request("PUT", path, json={"uris": pages[0]})
        for page in pages[1:]:
            await self._api_request("POST", path, json={"uris": page})

        logger.info(f"Playlist {playlist_id} now has {len(uris)} tracks ({len(pages)} calls)")

    async def sync_playlists(self, submissions: List[Submission]) -> Dict[str, int]:
        """Replace each round's playlist with the tracks picked for that round"""
        playlist_ids = config.playlist_ids()
        if not all(playlist_ids.values()):
            raise SpotifyConfigError("Playlist IDs are not all set in environment variables.")

        round_uris = collect_round_uris(submissions)
        for key in ROUND_KEYS:
            await self.replace_playlist_tracks(playlist_ids[key], round_uris[key])

        return {key: len(round_uris[key]) for key in ROUND_KEYS}

    @staticmethod
    def get_auth_url() -> str:
        params = {
            "client_id": config.SPOTIFY_CLIENT_ID,
            "response_type": "code",
            "redirect_uri": config.SPOTIFY_REDIRECT_URI,
            "scope": " ".join(AUTH_SCOPES),
        }
        return f"{config.SPOTIFY_ACCOUNTS_URL}/authorize?{urlencode(params)}"

    async def exchange_code_for_tokens(self, code: str) -> Dict[str, Any]:
        """Trade an authorization code for tokens (includes the refresh_token)"""
        return await self._token_request({
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": config.SPOTIFY_REDIRECT_URI,
        })


# Global instance so the access token cache is shared between requests
spotify_service = SpotifyService()


def get_spotify_service() -> SpotifyService:
    return spotify_service
