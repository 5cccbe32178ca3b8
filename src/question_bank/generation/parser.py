"""
LLM output parser
- strips markdown fences and locates the JSON array in the completion
- closes arrays that were cut off by the token limit
- validates each question (>= 4 options, real content, answer, explanation)
- normalizes defaults so every surviving question is a complete Question
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Iterator, List, Optional

from question_bank.errors import (
    LLMRefusalError,
    LLMResponseFormatError,
    NoValidQuestionsError,
)
from question_bank.models import Question

logger = logging.getLogger(__name__)

MIN_OPTIONS = 4
MIN_CONTENT_CHARS = 4
OPTION_LABELS = "ABCDEFGH"

REFUSAL_PHRASES = (
    "i cannot",
    "i'm sorry, i cannot",
    "i am unable to",
    "unable to provide",
    "抱歉，我無法",
    "我不能提供",
    "不能生成這類內容",
)

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.I)
_ANSWER_RE = re.compile(r"^\(?([A-Ha-h])[\s.)\]:]?")


def clean_llm_output(text: str) -> str:
    """Remove markdown code fences and stray backticks."""
    text = _FENCE_RE.sub("", text or "")
    return text.replace("`", "").strip()


def detect_refusal(text: str) -> None:
    """Raise LLMRefusalError when the model declined and produced no JSON."""
    low = (text or "").lower()
    if "[" in low or "{" in low:
        return
    for phrase in REFUSAL_PHRASES:
        if phrase in low:
            raise LLMRefusalError(
                "The model declined to generate questions for this material; "
                "try a different page range or settings."
            )


def extract_json_block(text: str, truncated: bool = False) -> str:
    """Slice out the outermost JSON array (or object) from the text.

    Whichever of ``[`` and ``{`` appears first decides the shape. A truncated
    completion has no closing bracket yet, so everything after the opening
    bracket is kept for repair.
    """
    arr, obj = text.find("["), text.find("{")
    if arr != -1 and (obj == -1 or arr < obj):
        end = text.rfind("]")
        if truncated or end < arr:
            return text[arr:]
        return text[arr:end + 1]
    end = text.rfind("}")
    if obj == -1 or end < obj:
        raise LLMResponseFormatError("No JSON structure found in the model response.")
    return text[obj:end + 1]


def iter_complete_objects(text: str) -> Iterator[str]:
    """Yield every balanced top-level ``{...}`` substring, ignoring braces in strings."""
    depth = 0
    start = -1
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0 and start != -1:
                yield text[start:i + 1]
                start = -1


def repair_truncated_array(text: str) -> str:
    """Keep only complete objects of a cut-off array and close it."""
    stripped = text.strip()
    if not stripped.startswith("[") or stripped.endswith("]"):
        return stripped
    objects = list(iter_complete_objects(stripped))
    if not objects:
        return stripped
    logger.info("repaired truncated response: kept %d complete objects", len(objects))
    return "[" + ",".join(objects) + "]"


def _salvage_objects(text: str) -> List[Dict[str, Any]]:
    found: List[Dict[str, Any]] = []
    for chunk in iter_complete_objects(text):
        try:
            obj = json.loads(chunk)
        except json.JSONDecodeError:
            continue
        if isinstance(obj, dict):
            found.append(obj)
    return found


def _coerce_options(raw: Any) -> Dict[str, str]:
    if isinstance(raw, dict):
        return {str(k).strip(): str(v).strip() for k, v in raw.items() if v is not None and str(v).strip()}
    if isinstance(raw, list):
        return {
            OPTION_LABELS[i]: str(v).strip()
            for i, v in enumerate(raw[: len(OPTION_LABELS)])
            if v is not None and str(v).strip()
        }
    return {}


def is_valid_question(raw: Any) -> bool:
    if not isinstance(raw, dict):
        return False
    content = raw.get("content")
    if not isinstance(content, str) or len(content.strip()) < MIN_CONTENT_CHARS:
        return False
    options = _coerce_options(raw.get("options"))
    if len(options) < MIN_OPTIONS:
        return False
    answer = raw.get("correct_answer")
    if not isinstance(answer, str) or _normalize_answer(answer, options) not in options:
        return False
    explanation = raw.get("explanation")
    return isinstance(explanation, str) and bool(explanation.strip())


def normalize_difficulty_label(label: Optional[str], difficulty: float = 0.5) -> str:
    """Map free-form labels ("易", "Medium", "困難") onto easy/medium/hard."""
    low = (label or "").strip().lower()
    if "易" in low or "easy" in low or "簡單" in low:
        return "easy"
    if "中" in low or "medium" in low:
        return "medium"
    if "難" in low or "hard" in low:
        return "hard"
    if difficulty < 0.4:
        return "easy"
    if difficulty > 0.7:
        return "hard"
    return "medium"


def _normalize_answer(answer: str, options: Dict[str, str]) -> str:
    answer = answer.strip()
    if answer in options:
        return answer
    m = _ANSWER_RE.match(answer)
    if m and m.group(1).upper() in options:
        return m.group(1).upper()
    return answer


def _as_float(value: Any, default: float) -> float:
    try:
        return min(1.0, max(0.0, float(value)))
    except (TypeError, ValueError):
        return default


def _as_int(value: Any, default: int, lo: int, hi: int) -> int:
    try:
        return min(hi, max(lo, int(value)))
    except (TypeError, ValueError):
        return default


def _as_tags(value: Any) -> List[str]:
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if isinstance(value, list):
        return [str(t).strip() for t in value if str(t).strip()]
    return []


def normalize_question(raw: Dict[str, Any], index: int, defaults: Optional[Dict[str, str]] = None) -> Question:
    defaults = defaults or {}
    options = _coerce_options(raw.get("options"))
    difficulty = _as_float(raw.get("difficulty"), 0.5)
    return Question(
        id=str(raw.get("id") or index + 1),
        content=raw["content"].strip(),
        options=options,
        correct_answer=_normalize_answer(raw["correct_answer"], options),
        explanation=raw["explanation"].strip(),
        question_type=str(raw.get("question_type") or "choice"),
        difficulty=difficulty,
        difficulty_label=normalize_difficulty_label(raw.get("difficulty_label"), difficulty),
        bloom_level=_as_int(raw.get("bloom_level"), 2, 1, 6),
        chapter=str(raw.get("chapter") or defaults.get("chapter", "")),
        source_pdf=str(raw.get("source_pdf") or defaults.get("source_pdf", "")),
        page_range=str(raw.get("page_range") or defaults.get("page_range", "")),
        tags=_as_tags(raw.get("tags")),
    )


def parse_questions(
    text: str,
    truncated: bool = False,
    defaults: Optional[Dict[str, str]] = None,
) -> List[Question]:
    """Turn a raw completion into validated questions.

    Raises LLMRefusalError, LLMResponseFormatError or NoValidQuestionsError.
    """
    detect_refusal(text)
    block = extract_json_block(clean_llm_output(text), truncated=truncated)
    if truncated:
        block = repair_truncated_array(block)

    try:
        data = json.loads(block)
    except json.JSONDecodeError as exc:
        logger.warning("JSON decode failed (%s); salvaging complete objects", exc)
        data = _salvage_objects(block)
        if not data:
            raise LLMResponseFormatError(f"Model response is not valid JSON: {exc}") from exc

    if isinstance(data, dict):
        # {"questions": [...]} wrapper or a single bare question
        data = data["questions"] if isinstance(data.get("questions"), list) else [data]
    if not isinstance(data, list):
        raise LLMResponseFormatError("Model response JSON is not a list of questions.")

    valid = [
        normalize_question(raw, idx, defaults)
        for idx, raw in enumerate(data)
        if is_valid_question(raw)
    ]
    logger.info("parsed %d questions, %d valid", len(data), len(valid))
    if not valid:
        raise NoValidQuestionsError("No valid questions in the model response; please retry.")
    return valid
