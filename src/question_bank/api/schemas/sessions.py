"""Schemas for generation session endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from question_bank.models import Question


class SessionSummary(BaseModel):
    id: str
    session_name: Optional[str] = None
    question_count: int = 0
    parameters: Dict[str, Any] = Field(default_factory=dict)
    created_at: str
    updated_at: str


class SessionListResponse(BaseModel):
    sessions: List[SessionSummary] = Field(default_factory=list)


class SessionQuestionsResponse(BaseModel):
    session_id: str
    questions: List[Question] = Field(default_factory=list)


class SessionQuestionsUpdate(BaseModel):
    questions: List[Question] = Field(..., description="Full edited list; replaces the stored questions.")
