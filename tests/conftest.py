"""
Shared pytest configuration for store, service and API tests.
Nothing here talks to Spotify: the catalog client is always mocked.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import MagicMock, AsyncMock
from typing import Any, Callable, Dict, Generator

from fastapi.testclient import TestClient

from musicmead.core import config as musicmead_config
from musicmead.main import app
from musicmead.models.submission_model import Rounds, Track
from musicmead.services.admin_auth_service import admin_sessions
from musicmead.services.spotify_service import SpotifyService, get_spotify_service
from musicmead.services.submission_store import SubmissionStore, get_submission_store

ADMIN_TEST_PASSWORD = "test-admin-password"


@pytest.fixture(scope="function")
def temp_test_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp(prefix="test_")
    temp_path = Path(temp_dir)
    yield temp_path
    if temp_path.exists():
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(scope="function")
def store(temp_test_dir) -> SubmissionStore:
    """A submission store backed by a fresh file in a temp directory."""
    return SubmissionStore(temp_test_dir / "data" / "submissions.json")


@pytest.fixture
def make_track() -> Callable[..., Dict[str, Any]]:
    """Build a track payload as the browser sends it."""
    def _make(track_id: str = "track1", **overrides) -> Dict[str, Any]:
        track = {
            "id": track_id,
            "uri": f"spotify:track:{track_id}",
            "name": f"Song {track_id}",
            "artists": "Artist A, Artist B",
            "album": f"Album {track_id}",
            "image": f"https://i.scdn.co/image/{track_id}",
            "caption": "",
        }
        track.update(overrides)
        return track
    return _make


@pytest.fixture
def make_rounds(make_track) -> Callable[[str], Rounds]:
    def _make(prefix: str = "t") -> Rounds:
        return Rounds(
            wrapped=Track(**make_track(f"{prefix}w")),
            peace=Track(**make_track(f"{prefix}p")),
            worship=Track(**make_track(f"{prefix}x")),
        )
    return _make


@pytest.fixture
def submission_payload(make_track) -> Callable[..., Dict[str, Any]]:
    def _make(name: str = "Grace Hopper", prefix: str = "t") -> Dict[str, Any]:
        return {
            "name": name,
            "rounds": {
                "wrapped": make_track(f"{prefix}w", caption="On repeat all year"),
                "peace": make_track(f"{prefix}p"),
                "worship": make_track(f"{prefix}x"),
            },
        }
    return _make


@pytest.fixture
def mock_spotify() -> MagicMock:
    """SpotifyService double with async methods."""
    spotify = MagicMock(spec=SpotifyService)
    spotify.search_tracks = AsyncMock(return_value=[])
    spotify.sync_playlists = AsyncMock(return_value={"wrapped": 0, "peace": 0, "worship": 0})
    spotify.exchange_code_for_tokens = AsyncMock(return_value={})
    spotify.get_auth_url.return_value = "https://accounts.spotify.com/authorize?client_id=test"
    return spotify


@pytest.fixture
def client(store, mock_spotify) -> Generator[TestClient, None, None]:
    """TestClient wired to the temp store and the mocked catalog client."""
    app.dependency_overrides[get_submission_store] = lambda: store
    app.dependency_overrides[get_spotify_service] = lambda: mock_spotify
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_enabled(monkeypatch) -> str:
    """Configure an admin password and start with no sessions."""
    monkeypatch.setattr(musicmead_config, "ADMIN_PASSWORD", ADMIN_TEST_PASSWORD)
    admin_sessions._sessions.clear()
    yield ADMIN_TEST_PASSWORD
    admin_sessions._sessions.clear()


@pytest.fixture
def admin_headers(client, admin_enabled) -> Dict[str, str]:
    response = client.post("/api/admin/login", json={"password": admin_enabled})
    assert response.status_code == 200
    return {"X-Admin-Token": response.json()["token"]}


@pytest.fixture
def playlist_env(monkeypatch) -> Dict[str, str]:
    """Set playlist ids for each round."""
    ids = {
        "PLAYLIST_WRAPPED_ID": "pl_wrapped",
        "PLAYLIST_PEACE_ID": "pl_peace",
        "PLAYLIST_WORSHIP_ID": "pl_worship",
    }
    for key, value in ids.items():
        monkeypatch.setattr(musicmead_config, key, value)
    return ids


@pytest.fixture
def spotify_credentials(monkeypatch) -> None:
    monkeypatch.setattr(musicmead_config, "SPOTIFY_CLIENT_ID", "client-id")
    monkeypatch.setattr(musicmead_config, "SPOTIFY_CLIENT_SECRET", "client-secret")
    monkeypatch.setattr(musicmead_config, "SPOTIFY_REDIRECT_URI", "http://localhost:3000/auth/callback")
    monkeypatch.setattr(musicmead_config, "SPOTIFY_REFRESH_TOKEN", "refresh-token")


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "api: mark test as API test"
    )
