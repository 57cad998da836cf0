# musicmead/core/config.py
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
PORT = int(os.getenv("PORT", "3000"))

# CORS Configuration (comma separated, "*" allows any origin)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# Submission storage
DATA_FILE = Path(os.getenv("DATA_FILE", "data/submissions.json"))

# Admin
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "").strip()
ADMIN_SESSION_TTL_MINUTES = int(os.getenv("ADMIN_SESSION_TTL_MINUTES", "720"))

# Spotify credentials
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REDIRECT_URI = os.getenv("SPOTIFY_REDIRECT_URI", "")
SPOTIFY_REFRESH_TOKEN = os.getenv("SPOTIFY_REFRESH_TOKEN", "")

# Target playlists, one per round
PLAYLIST_WRAPPED_ID = os.getenv("PLAYLIST_WRAPPED_ID", "")
PLAYLIST_PEACE_ID = os.getenv("PLAYLIST_PEACE_ID", "")
PLAYLIST_WORSHIP_ID = os.getenv("PLAYLIST_WORSHIP_ID", "")

# Keep-alive pinger (free hosts sleep after ~15 idle minutes)
HEALTH_PING_URL = os.getenv("HEALTH_PING_URL", "")
HEALTH_PING_INTERVAL_SECONDS = int(os.getenv("HEALTH_PING_INTERVAL_SECONDS", "840"))

# URLs
SPOTIFY_ACCOUNTS_URL = "https://accounts.spotify.com"
SPOTIFY_API_URL = "https://api.spotify.com/v1"

# Timezone used for human-facing timestamps
DISPLAY_TIMEZONE = "America/Los_Angeles"

if not ADMIN_PASSWORD:
    logger.warning("ADMIN_PASSWORD not set - admin endpoints are disabled")
if not SPOTIFY_REFRESH_TOKEN:
    logger.warning("SPOTIFY_REFRESH_TOKEN not set - visit /auth/login to obtain one")


def playlist_ids() -> dict:
    """Playlist id per round, read at call time"""
    return {
        "wrapped": PLAYLIST_WRAPPED_ID,
        "peace": PLAYLIST_PEACE_ID,
        "worship": PLAYLIST_WORSHIP_ID,
    }
