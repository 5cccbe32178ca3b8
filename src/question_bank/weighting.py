"""Advisory checks and helpers for weighting configs."""
from __future__ import annotations

from typing import List

from .models import ChapterWeight, WeightingConfig

_TOLERANCE = 0.01


def _total(model) -> float:
    return float(sum(model.model_dump().values()))


def weighting_warnings(config: WeightingConfig) -> List[str]:
    """One warning per distribution that does not add up to 100%."""
    warnings: List[str] = []
    for label, dist in (
        ("difficulty", config.difficulty_distribution),
        ("cognitive", config.cognitive_distribution),
        ("question type", config.question_type_weights),
    ):
        total = _total(dist)
        if abs(total - 100) > _TOLERANCE:
            warnings.append(f"{label} distribution sums to {total:g}%, expected 100%")
    if config.chapter_weights:
        total = sum(ch.weight for ch in config.chapter_weights)
        if abs(total - 100) > _TOLERANCE:
            warnings.append(f"chapter weights sum to {total:g}%, expected 100%")
    return warnings


def rebalance_chapter_questions(
    chapter_weights: List[ChapterWeight], total_questions: int
) -> List[ChapterWeight]:
    """Split ``total_questions`` across chapters in proportion to their weights.

    Counts are rounded per chapter, so they may not add up exactly to the
    total. All-zero weights leave every chapter at 0.
    """
    total_weight = sum(ch.weight for ch in chapter_weights)
    out: List[ChapterWeight] = []
    for ch in chapter_weights:
        count = round(ch.weight / total_weight * total_questions) if total_weight else 0
        out.append(ch.model_copy(update={"questions": int(count)}))
    return out
