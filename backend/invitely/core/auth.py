"""
Session cookie utilities and dependencies.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from typing import Optional
from invitely.core.database import get_db
from invitely.core.config import SESSION_SECRET, SESSION_COOKIE_NAME, DEMO_SECRET
from invitely.models.user import User
import hashlib
import hmac
import json
from datetime import datetime, timedelta, timezone

SESSION_MAX_AGE_HOURS = 24

# Simple session storage (in-memory cache in front of signature checks)
_sessions: dict[str, dict] = {}
# Tokens ended by logout, mapped to the time they would have expired anyway
_revoked: dict[str, datetime] = {}


def _sign(payload: str) -> str:
    secret = SESSION_SECRET or DEMO_SECRET
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def create_session(user_id: int, username: str, role: str) -> str:
    """Create a signed session token."""
    session_data = {
        'user_id': user_id,
        'username': username,
        'role': role,
        'created_at': datetime.now(timezone.utc).isoformat(),
    }

    session_json = json.dumps(session_data, sort_keys=True)
    session_token = f"{session_json}.{_sign(session_json)}"
    _sessions[session_token] = session_data

    return session_token


def _session_expiry(session_data: dict) -> datetime:
    created_at = datetime.fromisoformat(session_data['created_at'])
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at + timedelta(hours=SESSION_MAX_AGE_HOURS)


def _prune_revoked(now: Optional[datetime] = None) -> None:
    """Forget revoked tokens that are past their expiry and fail verification on their own."""
    now = now or datetime.now(timezone.utc)
    for token in [t for t, expires_at in _revoked.items() if expires_at <= now]:
        del _revoked[token]


def verify_session(session_token: Optional[str]) -> Optional[dict]:
    """Verify and get session data. Returns None for bad or expired tokens."""
    if not session_token:
        return None
    if session_token in _revoked:
        return None

    session_data = _sessions.get(session_token)
    if session_data is None:
        parts = session_token.rsplit('.', 1)
        if len(parts) != 2:
            return None

        session_json, signature = parts
        if not hmac.compare_digest(signature, _sign(session_json)):
            return None

        try:
            session_data = json.loads(session_json)
            created_at = datetime.fromisoformat(session_data['created_at'])
        except (ValueError, KeyError, TypeError):
            return None
        session_data['created_at'] = created_at.isoformat()

    if datetime.now(timezone.utc) > _session_expiry(session_data):
        _sessions.pop(session_token, None)
        return None

    # Cache it
    _sessions[session_token] = session_data
    return session_data


def delete_session(session_token: str):
    """Delete a session and revoke its token until it would have expired."""
    session_data = verify_session(session_token)
    _sessions.pop(session_token, None)
    if session_data:
        _revoked[session_token] = _session_expiry(session_data)
    _prune_revoked()


def get_current_user_optional(
    request: Request,
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Dependency returning the session user, or None if not signed in."""
    session_data = verify_session(request.cookies.get(SESSION_COOKIE_NAME))
    if not session_data:
        return None

    return db.query(User).filter(User.id == session_data['user_id']).first()
