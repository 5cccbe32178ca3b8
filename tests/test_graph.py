import json

import pytest

from conftest import question
from question_bank import storage
from question_bank.api.services.generation_service import run_generation
from question_bank.errors import InsufficientContentError, LLMResponseFormatError
from question_bank.models import ChapterType, DifficultyDistribution, Parameters, WeightingConfig


def test_page_range_generation_persists_valid_questions(text_pdf, fake_llm):
    params = Parameters(chapter="2-3", question_count=5)
    out = run_generation(text_pdf, params, source_pdf="ghg.pdf", user_ip="127.0.0.1", user_agent="pytest")

    # the three-option question is dropped
    assert [q["id"] for q in out["questions"]] == ["1", "2"]
    assert out["questions"][0]["source_pdf"] == "ghg.pdf"
    assert out["pages"] == [2, 3]

    prompt = fake_llm.calls[0]["user"]
    assert "Page 2: 2. Inventory Methods" in prompt
    assert "Introduction to Carbon Accounting" not in prompt
    assert fake_llm.calls[0]["max_tokens"] == 6000

    stored = storage.get_session_questions(out["session_id"])
    assert len(stored) == 2
    assert storage.get_user_session("127.0.0.1")["total_questions"] == 2


def test_topic_generation_uses_whole_document(text_pdf, fake_llm):
    params = Parameters(chapter="Carbon accounting", chapter_type=ChapterType.TOPIC, question_count=1)
    out = run_generation(text_pdf, params, persist=False)
    assert "Introduction to Carbon Accounting" in fake_llm.calls[0]["user"]
    assert len(out["questions"]) == 1
    assert out["questions"][0]["page_range"] == ""
    assert not out.get("session_id")
    assert storage.list_generation_sessions() == []


def test_weighting_warnings_are_advisory(text_pdf, fake_llm):
    params = Parameters(
        chapter="1",
        weighting=WeightingConfig(difficulty_distribution=DifficultyDistribution(easy=90, medium=90, hard=0)),
    )
    out = run_generation(text_pdf, params, persist=False)
    assert len(out["warnings"]) == 1
    assert out["questions"]


def test_existing_session_is_replaced(text_pdf, fake_llm):
    params = Parameters(chapter="1-3")
    first = run_generation(text_pdf, params)
    fake_llm.respond(json.dumps([question("42")]))
    second = run_generation(text_pdf, params, session_id=first["session_id"])
    assert second["session_id"] == first["session_id"]
    assert [q["content"] for q in storage.get_session_questions(first["session_id"])] == [
        question("42")["content"]
    ]


def test_failures_abort_without_persisting(text_pdf, blank_pdf, fake_llm):
    fake_llm.respond("The service is busy, please come back later.")
    with pytest.raises(LLMResponseFormatError):
        run_generation(text_pdf, Parameters(chapter="1-2"))

    with pytest.raises(InsufficientContentError):
        run_generation(blank_pdf, Parameters(chapter="1-2"))

    assert storage.list_generation_sessions() == []


def test_truncated_completion_is_repaired(text_pdf, fake_llm):
    full = json.dumps([question("1"), question("2")])
    fake_llm.respond(full[: full.rindex("explanation")], finish_reason="length")
    out = run_generation(text_pdf, Parameters(chapter="1"), persist=False)
    assert [q["id"] for q in out["questions"]] == ["1"]
