import pytest

from conftest import question
from question_bank import storage


def test_save_generation_creates_session_and_questions():
    session_id = storage.save_generation({"chapter": "1-2"}, [question("1"), question("2")], user_ip="1.2.3.4")
    session = storage.get_session(session_id)
    assert session["question_count"] == 2
    assert session["parameters"] == {"chapter": "1-2"}
    stored = storage.get_session_questions(session_id)
    assert [q["content"] for q in stored] == [question("1")["content"], question("2")["content"]]
    assert stored[0]["options"]["A"] == "Option A for 1"
    assert stored[0]["tags"] == ["basics"]


def test_replace_session_questions_deletes_and_reinserts():
    session_id = storage.new_generation_session({"chapter": "3"})
    storage.replace_session_questions(session_id, [question("1"), question("2")])
    edited = question("9", content="Edited wording of the first question?")
    assert storage.replace_session_questions(session_id, [edited]) == 1
    stored = storage.get_session_questions(session_id)
    assert [q["content"] for q in stored] == ["Edited wording of the first question?"]
    assert storage.get_session(session_id)["question_count"] == 1


def test_unknown_session_is_rejected_without_side_effects():
    with pytest.raises(KeyError):
        storage.save_generation({}, [question("1")], session_id="missing")
    assert storage.list_generation_sessions() == []


def test_list_sessions_most_recent_first():
    first = storage.new_generation_session({"n": 1})
    second = storage.new_generation_session({"n": 2})
    ids = [s["id"] for s in storage.list_generation_sessions(limit=5)]
    assert set(ids) == {first, second}
    assert len(storage.list_generation_sessions(limit=1)) == 1


def test_touch_user_session_updates_existing_row():
    first = storage.touch_user_session("10.0.0.1", "pytest")
    again = storage.touch_user_session("10.0.0.1", "pytest", total_questions=5)
    assert first == again
    row = storage.get_user_session("10.0.0.1")
    assert row["total_questions"] == 5
    assert row["user_agent"] == "pytest"
