from question_bank.generation.prompts import build_user_prompt, max_tokens_for
from question_bank.models import ChapterWeight, Parameters, WeightingConfig


def test_max_tokens_steps():
    assert max_tokens_for(5) == 6000
    assert max_tokens_for(10) == 6000
    assert max_tokens_for(11) == 8000
    assert max_tokens_for(16) == 10000


def test_user_prompt_carries_parameters():
    params = Parameters(
        chapter="3-4",
        question_count=7,
        question_style="application",
        keywords="carbon footprint, scope 3",
        selected_topics=["2. Inventory Methods"],
        sample_questions=[{"content": "What is Scope 1?"}],
        weighting=WeightingConfig(chapter_weights=[ChapterWeight(name="Ch2", weight=100, questions=7)]),
    )
    prompt = build_user_prompt(params, "Page 3: Emission factors convert activity data.", source_pdf="ghg.pdf")
    assert prompt.startswith("Write 7 multiple-choice questions")
    assert "short scenarios" in prompt
    assert "carbon footprint, scope 3" in prompt
    assert "2. Inventory Methods" in prompt
    assert "What is Scope 1?" in prompt
    assert "Ch2: 7" in prompt
    assert "Page 3: Emission factors" in prompt
    assert '"source_pdf": "ghg.pdf"' in prompt
    assert '"page_range": "3-4"' in prompt


def test_optional_sections_are_omitted():
    prompt = build_user_prompt(Parameters(chapter="1"), "Material text.")
    assert "Focus on these keywords" not in prompt
    assert "sample questions" not in prompt
    assert "Only cover" not in prompt


def test_topic_chapter_has_no_page_range():
    params = Parameters(chapter="Carbon accounting", chapter_type="topic")
    prompt = build_user_prompt(params, "Material text.", source_pdf="ghg.pdf")
    assert '"page_range": ""' in prompt
    assert '"chapter": "Carbon accounting"' in prompt
