"""Request and response models for PDF inspection endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field

from question_bank.extraction import OutlineItem


class PageRangeRequest(BaseModel):
    page_range: str = Field(..., max_length=500, description="Descriptor such as '1-5, 8, 10-12'.")


class PageRangeResponse(BaseModel):
    page_range: str
    pages: List[int] = Field(default_factory=list)


class OutlineResponse(BaseModel):
    source_pdf: Optional[str] = None
    outline: List[OutlineItem] = Field(default_factory=list)
    titles: List[str] = Field(default_factory=list, description="Flattened titles in outline order.")


class TextResponse(BaseModel):
    source_pdf: Optional[str] = None
    text: str
    length: int
    pages: List[int] = Field(default_factory=list, description="Pages that contributed text.")
    skipped_pages: List[int] = Field(default_factory=list)
