"""Endpoints for inspecting uploaded PDFs before generation."""

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from ..errors import to_http_exception
from ..schemas.pdf import OutlineResponse, PageRangeRequest, PageRangeResponse, TextResponse
from ..services.pdf_service import build_outline, extract_text, parse_pages

router = APIRouter(prefix="/pdf", tags=["pdf"])


async def _read_pdf(file: UploadFile) -> bytes:
    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty.")
    return data


@router.post(
    "/page-range",
    response_model=PageRangeResponse,
    status_code=status.HTTP_200_OK,
    summary="Parse a page-range descriptor",
)
async def page_range(request: PageRangeRequest) -> PageRangeResponse:
    return PageRangeResponse(page_range=request.page_range, pages=parse_pages(request.page_range))


@router.post(
    "/outline",
    response_model=OutlineResponse,
    status_code=status.HTTP_200_OK,
    summary="Detect section titles in a PDF",
)
async def outline(
    file: UploadFile = File(..., description="PDF document."),
    page_range: Optional[str] = Form(None, description="Restrict to these pages."),
) -> OutlineResponse:
    """Return the heuristic outline used to pick the topics to cover."""
    data = await _read_pdf(file)
    try:
        result = build_outline(data, page_range=page_range)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return OutlineResponse(source_pdf=file.filename, **result)


@router.post(
    "/text",
    response_model=TextResponse,
    status_code=status.HTTP_200_OK,
    summary="Extract the text that would be sent to the model",
)
async def text(
    file: UploadFile = File(..., description="PDF document."),
    page_range: Optional[str] = Form(None, description="Pages to extract; whole document if omitted."),
) -> TextResponse:
    data = await _read_pdf(file)
    try:
        result = extract_text(data, page_range=page_range)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return TextResponse(source_pdf=file.filename, length=len(result["text"]), **result)
