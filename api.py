"""FastAPI endpoints for driving calculator sessions.

Routes
------
POST   /sessions                 Open a session
GET    /sessions/{id}            Current snapshot
POST   /sessions/{id}/commands   Run one command, return the snapshot
DELETE /sessions/{id}            Close a session
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response

from models import CommandRequest, Session, SessionCreate, Snapshot
from store import SessionNotFoundError, SessionStore

router = APIRouter(prefix="/sessions", tags=["sessions"])

# The store instance is injected by the app factory (see app.py).
_store: SessionStore | None = None


def set_store(store: SessionStore) -> None:
    """Inject the store instance. Called once at app startup."""
    global _store
    _store = store


def get_store() -> SessionStore:
    assert _store is not None, "Store not initialized"
    return _store


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Session not found: {session_id}")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=Session, status_code=201)
def create_session(payload: SessionCreate | None = None) -> Session:
    """Open a session, optionally with its own engine settings."""
    settings = payload.settings if payload is not None else None
    session_id, snapshot = get_store().create(settings)
    return Session(id=session_id, snapshot=snapshot)


@router.get("/{session_id}", response_model=Snapshot)
def get_session(session_id: str) -> Snapshot:
    """Return the current snapshot of a session."""
    try:
        return get_store().snapshot(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post("/{session_id}/commands", response_model=Snapshot)
def run_command(session_id: str, command: CommandRequest) -> Snapshot:
    """Run one command against a session."""
    try:
        return get_store().execute(session_id, command.root)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str) -> Response:
    """Close a session."""
    try:
        get_store().delete(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return Response(status_code=204)
