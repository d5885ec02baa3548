from models import LogRecord
from services.scoring import petal_breakdown, score
from conftest import make_log


def record(**overrides) -> LogRecord:
    return LogRecord.model_validate(make_log(**overrides))


def test_all_criteria_met_gives_seven():
    assert score(record()) == 7


def test_nutrition_needs_exactly_three_items():
    assert score(record(nutrition=["Tryptophan"])) == 6
    assert score(record(nutrition=["a", "b", "c", "d"])) == 6
    assert score(record(nutrition=None)) == 6


def test_thresholds_keep_their_strictness():
    assert petal_breakdown(record(sunlight_minutes=10)).sunlight is True
    assert petal_breakdown(record(sunlight_minutes=9.9)).sunlight is False
    assert petal_breakdown(record(water_liters=2)).water is False
    assert petal_breakdown(record(water_liters=2.01)).water is True
    assert petal_breakdown(record(movement_minutes=30)).movement is False
    assert petal_breakdown(record(movement_minutes=31)).movement is True
    assert petal_breakdown(record(sleep_hours=7)).sleep is True
    assert petal_breakdown(record(mental_reset_minutes=5)).mental_reset is True
    assert petal_breakdown(record(mental_reset_minutes=4)).mental_reset is False


def test_social_must_be_true():
    assert petal_breakdown(record(social=False)).social is False
    assert petal_breakdown(record(social=None)).social is False


def test_empty_day_scores_zero():
    empty = record(sunlight_minutes=0, water_liters=0, movement_minutes=0, sleep_hours=0,
                   social=None, mental_reset_minutes=None, nutrition=None)
    assert score(empty) == 0


def test_missing_record_scores_zero():
    assert score(None) == 0


def test_mood_does_not_affect_score():
    assert score(record(mood="tired")) == score(record(mood="great")) == 7
