"""Endpoints for browsing and editing generation sessions."""

from fastapi import APIRouter, HTTPException, Query, status

from ..errors import to_http_exception
from ..schemas.sessions import (
    SessionListResponse,
    SessionQuestionsResponse,
    SessionQuestionsUpdate,
    SessionSummary,
)
from ..services.session_service import (
    fetch_session,
    list_session_questions,
    list_sessions,
    save_edited_questions,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get(
    "",
    response_model=SessionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List recent generation sessions",
)
async def list_sessions_endpoint(
    limit: int = Query(20, ge=1, le=100, description="Maximum number of sessions to return."),
) -> SessionListResponse:
    return SessionListResponse(sessions=[SessionSummary(**s) for s in list_sessions(limit)])


@router.get(
    "/{session_id}",
    response_model=SessionSummary,
    status_code=status.HTTP_200_OK,
    summary="Get one generation session",
)
async def get_session_endpoint(session_id: str) -> SessionSummary:
    session = fetch_session(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return SessionSummary(**session)


@router.get(
    "/{session_id}/questions",
    response_model=SessionQuestionsResponse,
    status_code=status.HTTP_200_OK,
    summary="Get questions stored for a session",
)
async def session_questions(session_id: str) -> SessionQuestionsResponse:
    if fetch_session(session_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return SessionQuestionsResponse(session_id=session_id, questions=list_session_questions(session_id))


@router.put(
    "/{session_id}/questions",
    response_model=SessionQuestionsResponse,
    status_code=status.HTTP_200_OK,
    summary="Replace a session's questions with an edited list",
)
async def update_session_questions(session_id: str, request: SessionQuestionsUpdate) -> SessionQuestionsResponse:
    """Persist inline edits (delete + reinsert)."""
    try:
        save_edited_questions(session_id, request.questions)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return SessionQuestionsResponse(session_id=session_id, questions=list_session_questions(session_id))
