"""
Temporary storage for mapping sessions.
Stores one entry per upload in memory with TTL expiration.
Single-process only; nothing survives a restart.
"""
import uuid
from datetime import datetime, timedelta
from typing import Any, Optional

_sessions: dict[str, tuple[datetime, Any]] = {}
DEFAULT_TTL_MINUTES = 30


def store_session(data: Any, ttl_minutes: int = DEFAULT_TTL_MINUTES) -> str:
    """Store a new session, return session_id."""
    session_id = str(uuid.uuid4())
    _sessions[session_id] = (_expiry(ttl_minutes), data)
    _cleanup_expired()
    return session_id


def retrieve_session(session_id: str) -> Optional[Any]:
    """Retrieve a session by id. Returns None if expired/not found."""
    entry = _sessions.get(session_id)
    if entry is None:
        return None
    expires_at, data = entry
    if datetime.now() > expires_at:
        del _sessions[session_id]
        return None
    return data


def replace_session(session_id: str, data: Any, ttl_minutes: int = DEFAULT_TTL_MINUTES) -> None:
    """Overwrite an existing session and push its expiry forward."""
    _sessions[session_id] = (_expiry(ttl_minutes), data)


def delete_session(session_id: str) -> None:
    """Remove a session (no error if missing)."""
    _sessions.pop(session_id, None)


def clear_sessions() -> None:
    """Drop every session."""
    _sessions.clear()


def _expiry(ttl_minutes: int) -> datetime:
    return datetime.now() + timedelta(minutes=ttl_minutes)


def _cleanup_expired() -> None:
    """Remove all expired entries."""
    now = datetime.now()
    expired = [k for k, (exp, _) in _sessions.items() if now > exp]
    for k in expired:
        del _sessions[k]
