"""Endpoint for generating multiple-choice questions from a PDF."""

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status
from pydantic import ValidationError

from question_bank.models import Parameters

from ..errors import to_http_exception
from ..schemas.generation import GenerationResponse
from ..services.generation_service import run_generation

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post(
    "/generate",
    response_model=GenerationResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate questions from an uploaded PDF",
)
async def generate(
    request: Request,
    file: UploadFile = File(..., description="PDF document."),
    parameters: str = Form(..., description="Generation parameters as a JSON object."),
    session_id: Optional[str] = Form(None, description="Existing session whose questions are replaced."),
    persist: bool = Form(True, description="Save the questions to the question bank."),
) -> GenerationResponse:
    """Extract the chosen pages, ask the model for questions and store them."""
    try:
        params = Parameters.model_validate_json(parameters)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors(include_url=False)
        ) from exc

    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty.")

    try:
        state = run_generation(
            pdf=data,
            parameters=params,
            source_pdf=file.filename or "",
            session_id=session_id,
            persist=persist,
            user_ip=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    except Exception as exc:
        raise to_http_exception(exc) from exc

    return GenerationResponse(
        session_id=state.get("session_id"),
        requested=params.question_count,
        questions=state.get("questions") or [],
        warnings=state.get("warnings") or [],
        pages=state.get("pages") or [],
        skipped_pages=state.get("skipped_pages") or [],
    )
