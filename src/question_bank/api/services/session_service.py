"""Service helpers for generation sessions and stored questions."""

from typing import Any, Dict, List, Optional

from question_bank.models import Question
from question_bank.storage import (
    get_session,
    get_session_questions,
    list_generation_sessions,
    replace_session_questions,
)


def list_sessions(limit: int) -> List[Dict[str, Any]]:
    return list_generation_sessions(limit=limit)


def fetch_session(session_id: str) -> Optional[Dict[str, Any]]:
    return get_session(session_id)


def list_session_questions(session_id: str) -> List[Dict[str, Any]]:
    """Retrieve stored questions for a given session."""
    return get_session_questions(session_id)


def save_edited_questions(session_id: str, questions: List[Question]) -> int:
    """Persist inline edits by replacing the session's questions."""
    return replace_session_questions(session_id, [q.model_dump() for q in questions])
