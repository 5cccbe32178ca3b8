import json
from types import SimpleNamespace
from typing import List, Sequence, Tuple

import pymupdf as fitz
import pytest

from question_bank.generation import llm
from question_bank.generation.llm import LLMCompletion
from question_bank.storage import db


def make_pdf(pages: Sequence[Sequence[Tuple[str, float]]]) -> bytes:
    """Build a PDF in memory; each page is a list of (text, font size) lines."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        y = 72.0
        for text, size in lines:
            page.insert_text((72, y), text, fontsize=size)
            y += size + 10
    data = doc.tobytes()
    doc.close()
    return data


def question(qid: str, n_options: int = 4, **overrides) -> dict:
    labels = "ABCDEF"[:n_options]
    item = {
        "id": qid,
        "content": f"Which statement about topic {qid} is correct?",
        "options": {label: f"Option {label} for {qid}" for label in labels},
        "correct_answer": "A",
        "explanation": f"Option A restates the definition given for {qid}.",
        "question_type": "choice",
        "difficulty": 0.6,
        "difficulty_label": "medium",
        "bloom_level": 2,
        "chapter": "1-2",
        "tags": ["basics"],
    }
    item.update(overrides)
    return item


@pytest.fixture
def make_pdf_bytes():
    return make_pdf


@pytest.fixture
def text_pdf() -> bytes:
    body = "Carbon inventories list every greenhouse gas source in scope."
    return make_pdf([
        [("Introduction to Carbon Accounting", 20), ("Scope definitions", 11), (body, 11)],
        [("2. Inventory Methods", 12), ("2.1 Data collection", 12), (body, 11)],
        [(body, 11), (body, 11)],
    ])


@pytest.fixture
def blank_pdf() -> bytes:
    return make_pdf([[], [("tiny", 11)]])


@pytest.fixture(autouse=True)
def temp_db(tmp_path, monkeypatch):
    path = str(tmp_path / "question_bank_test.db")
    monkeypatch.setattr(db, "DB_PATH", path)
    return path


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace the chat model call; returns the list of captured prompts."""
    calls: List[dict] = []
    state = {"text": json.dumps([question("1"), question("2"), question("3", n_options=3)]),
             "finish_reason": "stop"}

    def _complete(system_prompt, user_prompt, max_tokens):
        calls.append({"system": system_prompt, "user": user_prompt, "max_tokens": max_tokens})
        return LLMCompletion(text=state["text"], finish_reason=state["finish_reason"])

    monkeypatch.setattr(llm, "complete", _complete)

    def set_response(text: str, finish_reason: str = "stop"):
        state["text"] = text
        state["finish_reason"] = finish_reason

    return SimpleNamespace(calls=calls, respond=set_response)
