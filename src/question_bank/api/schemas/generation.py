"""Response models for question generation."""

from typing import List, Optional

from pydantic import BaseModel, Field

from question_bank.models import Question


class GenerationResponse(BaseModel):
    session_id: Optional[str] = Field(None, description="Session the questions were saved to, if persisted.")
    requested: int
    questions: List[Question] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list, description="Advisory weighting warnings.")
    pages: List[int] = Field(default_factory=list)
    skipped_pages: List[int] = Field(default_factory=list)
