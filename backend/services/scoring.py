from typing import Optional

from models import LogRecord, PetalBreakdown

MAX_PETALS = 7
KEY_NUTRIENTS = ["Tryptophan", "Greens", "Healthy Fats"]


def petal_breakdown(record: Optional[LogRecord]) -> PetalBreakdown:
    """每个花瓣是否点亮；阈值有的是 >= 有的是 >，保持原样"""
    if record is None:
        return PetalBreakdown()
    return PetalBreakdown(
        sunlight=record.sunlight_minutes >= 10,
        water=record.water_liters > 2,
        nutrition=record.nutrition is not None and len(record.nutrition) == 3,
        movement=record.movement_minutes > 30,
        sleep=record.sleep_hours >= 7,
        social=record.social is True,
        mental_reset=record.mental_reset_minutes is not None and record.mental_reset_minutes >= 5,
    )


def score(record: Optional[LogRecord]) -> int:
    """花瓣数 0-7，没有记录为 0"""
    petals = sum(1 for lit in petal_breakdown(record).model_dump().values() if lit)
    return max(0, min(MAX_PETALS, petals))
