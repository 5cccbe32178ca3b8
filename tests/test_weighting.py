from question_bank.models import ChapterWeight, DifficultyDistribution, WeightingConfig
from question_bank.weighting import rebalance_chapter_questions, weighting_warnings


def test_default_config_has_no_warnings():
    assert weighting_warnings(WeightingConfig()) == []


def test_each_bad_distribution_is_reported():
    config = WeightingConfig(
        difficulty_distribution=DifficultyDistribution(easy=50, medium=50, hard=20),
        chapter_weights=[ChapterWeight(name="Ch1", weight=40), ChapterWeight(name="Ch2", weight=40)],
    )
    warnings = weighting_warnings(config)
    assert len(warnings) == 2
    assert warnings[0].startswith("difficulty distribution sums to 120%")
    assert "chapter weights sum to 80%" in warnings[1]


def test_rebalance_is_proportional():
    chapters = [ChapterWeight(name="A", weight=60), ChapterWeight(name="B", weight=30), ChapterWeight(name="C", weight=10)]
    out = rebalance_chapter_questions(chapters, 20)
    assert [c.questions for c in out] == [12, 6, 2]
    # inputs are not mutated
    assert [c.questions for c in chapters] == [0, 0, 0]


def test_rebalance_with_zero_weights():
    out = rebalance_chapter_questions([ChapterWeight(name="A", weight=0)], 10)
    assert out[0].questions == 0
