from fastapi import APIRouter, Depends, HTTPException, Request
import aiohttp
import logging
from musicmead.models.admin_model import (
    AdminEnabledResponse,
    AdminLoginResponse,
    OkResponse,
    SyncResponse,
)
from musicmead.services.admin_auth_service import (
    AdminDisabledError,
    InvalidAdminPasswordError,
    admin_sessions,
    require_admin,
)
from musicmead.services.spotify_service import SpotifyError, SpotifyService, get_spotify_service
from musicmead.services.submission_store import SubmissionStore, get_submission_store
from musicmead.utils.request_utils import read_json_body

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/enabled", response_model=AdminEnabledResponse)
async def admin_enabled():
    """Tells the UI whether to render admin links and buttons"""
    return AdminEnabledResponse(enabled=admin_sessions.is_enabled())


@router.post("/login", response_model=AdminLoginResponse)
async def admin_login(request: Request):
    """Exchange the admin password for a session token"""
    body = await read_json_body(request)
    password = body.get("password") if isinstance(body, dict) else None
    if not isinstance(password, str) or not password:
        raise HTTPException(status_code=400, detail="Password is required")

    try:
        session = admin_sessions.login(password)
    except AdminDisabledError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except InvalidAdminPasswordError:
        raise HTTPException(status_code=401, detail="Unauthorized")

    return AdminLoginResponse(token=session.token, expires_at=session.expires_at.isoformat())


@router.post("/logout", response_model=OkResponse)
async def admin_logout(token: str = Depends(require_admin)):
    admin_sessions.logout(token)
    return OkResponse()


@router.delete("/submission/{submission_id}", response_model=OkResponse)
async def delete_submission(
    submission_id: str,
    _: str = Depends(require_admin),
    store: SubmissionStore = Depends(get_submission_store)
):
    if not store.delete_submission(submission_id):
        raise HTTPException(status_code=404, detail="Submission not found")
    return OkResponse()


@router.post("/sync", response_model=SyncResponse)
async def sync_playlists(
    _: str = Depends(require_admin),
    store: SubmissionStore = Depends(get_submission_store),
    spotify: SpotifyService = Depends(get_spotify_service)
):
    """Replace the three round playlists with the current picks"""
    submissions = store.list_submissions()
    try:
        tracks = await spotify.sync_playlists(submissions)
    except (SpotifyError, aiohttp.ClientError) as e:
        logger.error(f"Error syncing playlists: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to sync playlists")

    logger.info(f"Synced playlists from {len(submissions)} submissions: {tracks}")
    return SyncResponse(count=len(submissions), tracks=tracks)
