"""
Question Generator (PDF-grounded)
- builds the prompt from the generation parameters and extracted PDF text
- calls the chat model once (no retries)
- returns validated questions, capped at the requested count
"""
import logging
from typing import List

from question_bank.errors import LLMResponseFormatError
from question_bank.models import Parameters, Question

from . import llm
from .parser import parse_questions
from .prompts import build_system_prompt, build_user_prompt, max_tokens_for, page_range_label

logger = logging.getLogger(__name__)


def generate_questions(params: Parameters, pdf_content: str, source_pdf: str = "") -> List[Question]:
    if not (pdf_content or "").strip():
        raise ValueError("No PDF content to generate questions from.")

    completion = llm.complete(
        build_system_prompt(),
        build_user_prompt(params, pdf_content, source_pdf=source_pdf),
        max_tokens=max_tokens_for(params.question_count),
    )
    if not completion.text:
        raise LLMResponseFormatError("The model returned an empty response.")
    if completion.truncated:
        logger.warning("completion hit the token limit; attempting repair")

    questions = parse_questions(
        completion.text,
        truncated=completion.truncated,
        defaults={"chapter": params.chapter, "source_pdf": source_pdf, "page_range": page_range_label(params)},
    )
    if len(questions) < params.question_count:
        logger.info("requested %d questions, got %d", params.question_count, len(questions))
    return questions[: params.question_count]
