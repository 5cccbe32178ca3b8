"""Prompt assembly for multiple-choice question generation."""
from __future__ import annotations

import json
from typing import Any, Dict, List

from question_bank.models import ChapterType, Parameters

SYSTEM_PROMPT = (
    "You are an experienced exam writer. You write multiple-choice questions that are "
    "strictly grounded in the course material you are given. Every question has exactly "
    "one correct answer, four plausible options labelled A-D, and a short explanation "
    "that cites the material. Reply with JSON only."
)

_STYLE_GUIDANCE = {
    "intuitive": "Ask direct, clearly worded questions about key facts and definitions.",
    "diverse": "Vary the phrasing and angle of each question; avoid repeating patterns.",
    "application": "Frame questions as short scenarios that require applying the concepts.",
    "image-data": "Ask about figures, tables and numeric data described in the material.",
    "mixed": "Mix recall, scenario and data-interpretation questions.",
}

_OUTPUT_CONTRACT = (
    "Return ONLY a JSON array, no extra text, where every element looks like:\n"
    "{{\"id\": \"1\", \"content\": \"...?\", "
    "\"options\": {{\"A\": \"...\", \"B\": \"...\", \"C\": \"...\", \"D\": \"...\"}}, "
    "\"correct_answer\": \"A\", \"explanation\": \"...\", \"question_type\": \"choice\", "
    "\"difficulty\": 0.6, \"difficulty_label\": \"medium\", \"bloom_level\": 2, "
    "\"chapter\": \"{chapter}\", \"source_pdf\": \"{source_pdf}\", "
    "\"page_range\": \"{page_range}\", \"tags\": [\"...\"]}}"
)

# max_tokens steps by requested question count
_TOKEN_STEPS = ((15, 10000), (10, 8000))
_DEFAULT_MAX_TOKENS = 6000


def max_tokens_for(question_count: int) -> int:
    for threshold, tokens in _TOKEN_STEPS:
        if question_count > threshold:
            return tokens
    return _DEFAULT_MAX_TOKENS


def page_range_label(params: Parameters) -> str:
    """The page descriptor for page-range chapters, empty for topic chapters."""
    return params.chapter if params.chapter_type == ChapterType.PAGES.value else ""


def build_system_prompt() -> str:
    return SYSTEM_PROMPT


def _weighting_block(params: Parameters) -> List[str]:
    w = params.weighting
    diff = w.difficulty_distribution
    cog = w.cognitive_distribution
    lines = [
        f"- Difficulty mix: easy {diff.easy:g}%, medium {diff.medium:g}%, hard {diff.hard:g}%",
        (
            f"- Cognitive levels: remember {cog.remember:g}%, understand {cog.understand:g}%, "
            f"apply {cog.apply:g}%, analyze {cog.analyze:g}%"
        ),
    ]
    chapters = [ch for ch in w.chapter_weights if ch.questions > 0]
    if chapters:
        lines.append(
            "- Questions per chapter: " + ", ".join(f"{ch.name}: {ch.questions}" for ch in chapters)
        )
    return lines


def _samples_block(samples: List[Dict[str, Any]]) -> str:
    return json.dumps(samples[:3], ensure_ascii=False, indent=2)


def build_user_prompt(params: Parameters, pdf_content: str, source_pdf: str = "") -> str:
    """Compose the user message: requirements, optional guidance, material, contract."""
    count = params.question_count
    parts: List[str] = [
        f"Write {count} multiple-choice questions based on the material below.",
        "",
        "Requirements:",
        f"- Style: {_STYLE_GUIDANCE.get(str(params.question_style), _STYLE_GUIDANCE['intuitive'])}",
        *_weighting_block(params),
    ]

    if params.keywords and params.keywords.strip():
        parts.append(f"- Focus on these keywords: {params.keywords.strip()}")
    if params.selected_topics:
        parts.append("- Only cover these sections: " + "; ".join(params.selected_topics))
    if params.sample_questions:
        parts += ["", "Match the tone and format of these sample questions (do not copy them):",
                  _samples_block(params.sample_questions)]

    parts += [
        "",
        "Material:",
        pdf_content.strip(),
        "",
        _OUTPUT_CONTRACT.format(
            chapter=params.chapter, source_pdf=source_pdf, page_range=page_range_label(params)
        ),
    ]
    return "\n".join(parts)
