import pytest
from datetime import datetime, timedelta, timezone
from fastapi import HTTPException
from musicmead.core import config
from musicmead.services.admin_auth_service import (
    AdminDisabledError,
    AdminSessionManager,
    InvalidAdminPasswordError,
    require_admin,
)


@pytest.fixture
def sessions(monkeypatch) -> AdminSessionManager:
    monkeypatch.setattr(config, "ADMIN_PASSWORD", "hunter2")
    return AdminSessionManager(ttl_minutes=30)


class TestAdminSessionManager:

    def test_login_issues_token(self, sessions):
        session = sessions.login("hunter2")

        assert session.token
        assert sessions.validate(session.token) is True
        assert session.expires_at > datetime.now(timezone.utc) + timedelta(minutes=29)

    def test_each_login_gets_a_new_token(self, sessions):
        first = sessions.login("hunter2")
        second = sessions.login("hunter2")

        assert first.token != second.token
        assert sessions.active_count() == 2

    def test_wrong_password_rejected(self, sessions):
        with pytest.raises(InvalidAdminPasswordError):
            sessions.login("hunter3")

        assert sessions.active_count() == 0

    def test_disabled_without_password(self, monkeypatch):
        monkeypatch.setattr(config, "ADMIN_PASSWORD", "")
        sessions = AdminSessionManager()

        assert sessions.is_enabled() is False
        with pytest.raises(AdminDisabledError):
            sessions.login("")

    def test_unknown_and_missing_tokens_are_invalid(self, sessions):
        assert sessions.validate(None) is False
        assert sessions.validate("") is False
        assert sessions.validate("made-up") is False

    def test_expired_session_is_rejected_and_purged(self, sessions):
        session = sessions.login("hunter2")
        session.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)

        assert sessions.validate(session.token) is False
        assert sessions.active_count() == 0

    def test_logout_revokes_token(self, sessions):
        session = sessions.login("hunter2")

        assert sessions.logout(session.token) is True
        assert sessions.validate(session.token) is False
        assert sessions.logout(session.token) is False

    def test_default_ttl_comes_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "ADMIN_SESSION_TTL_MINUTES", 5)

        assert AdminSessionManager().ttl == timedelta(minutes=5)


class TestRequireAdmin:

    @pytest.mark.asyncio
    async def test_disabled_returns_503(self, monkeypatch):
        monkeypatch.setattr(config, "ADMIN_PASSWORD", "")

        with pytest.raises(HTTPException) as exc_info:
            await require_admin("anything")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_invalid_token_returns_401(self, admin_enabled):
        with pytest.raises(HTTPException) as exc_info:
            await require_admin("not-a-session")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Unauthorized"
