import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from fastapi import Header, HTTPException

from musicmead.core import config

logger = logging.getLogger(__name__)


class AdminAuthError(Exception):
    """Base class for admin login errors"""


class AdminDisabledError(AdminAuthError):
    def __init__(self):
        super().__init__("Admin is not configured on the server.")


class InvalidAdminPasswordError(AdminAuthError):
    def __init__(self):
        super().__init__("Invalid admin password")


@dataclass
class AdminSession:
    token: str
    expires_at: datetime


class AdminSessionManager:
    """In-memory admin sessions issued in exchange for the admin password"""

    def __init__(self, ttl_minutes: Optional[int] = None):
        self._ttl_minutes = ttl_minutes
        # token -> session
        self._sessions: Dict[str, AdminSession] = {}

    @property
    def ttl(self) -> timedelta:
        minutes = self._ttl_minutes if self._ttl_minutes is not None else config.ADMIN_SESSION_TTL_MINUTES
        return timedelta(minutes=minutes)

    @staticmethod
    def is_enabled() -> bool:
        return bool(config.ADMIN_PASSWORD)

    def login(self, password: str) -> AdminSession:
        if not self.is_enabled():
            raise AdminDisabledError()
        if not hmac.compare_digest(password.encode("utf-8"), config.ADMIN_PASSWORD.encode("utf-8")):
            logger.warning("Rejected admin login with wrong password")
            raise InvalidAdminPasswordError()

        self.purge_expired()
        session = AdminSession(
            token=secrets.token_urlsafe(32),
            expires_at=datetime.now(timezone.utc) + self.ttl,
        )
        self._sessions[session.token] = session
        logger.info(f"Issued admin session expiring at {session.expires_at.isoformat()}")
        return session

    def validate(self, token: Optional[str]) -> bool:
        if not token:
            return False
        session = self._sessions.get(token)
        if session is None:
            return False
        if session.expires_at <= datetime.now(timezone.utc):
            del self._sessions[token]
            logger.info("Admin session expired")
            return False
        return True

    def logout(self, token: Optional[str]) -> bool:
        if token and token in self._sessions:
            del self._sessions[token]
            logger.info("Admin session revoked")
            return True
        return False

    def purge_expired(self) -> int:
        now = datetime.now(timezone.utc)
        expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        return len(expired)

    def active_count(self) -> int:
        self.purge_expired()
        return len(self._sessions)


# Global instance
admin_sessions = AdminSessionManager()


async def require_admin(x_admin_token: Optional[str] = Header(None)) -> str:
    """Dependency guarding admin-only routes.

    Args:
        x_admin_token: Session token from the X-Admin-Token header

    Returns:
        The validated token

    Raises:
        HTTPException: 503 if admin is disabled, 401 if the token is not valid
    """
    if not admin_sessions.is_enabled():
        raise HTTPException(status_code=503, detail="Admin is not configured on the server.")
    if not admin_sessions.validate(x_admin_token):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_admin_token
