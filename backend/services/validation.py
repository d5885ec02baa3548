import math
from datetime import datetime
from typing import Any, List, Mapping

REQUIRED_FIELDS = ["date", "sunlight_minutes", "water_liters", "movement_minutes", "sleep_hours"]

# 字段 -> (最小值, 最大值)
NUMERIC_RANGES = {
    "sunlight_minutes": (0, 1440),
    "water_liters": (0, 20),
    "movement_minutes": (0, 1440),
    "sleep_hours": (0, 24),
    "mental_reset_minutes": (0, 1440),
}


def _is_number(value: Any) -> bool:
    # bool 是 int 的子类，这里要排除
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _valid_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        return datetime.strptime(value, "%Y-%m-%d").strftime("%Y-%m-%d") == value
    except ValueError:
        return False


def validate_log(candidate: Any) -> List[str]:
    """检查提交的记录，返回所有违规说明；空列表表示通过"""
    if not isinstance(candidate, Mapping):
        return ["Log must be a JSON object"]

    missing = [f for f in REQUIRED_FIELDS if candidate.get(f) is None]
    if missing:
        return [f"Missing required fields: {', '.join(missing)}"]

    errors = []
    if not _valid_date(candidate["date"]):
        errors.append(f"Invalid value for date: {candidate['date']!r} (expected YYYY-MM-DD)")

    for field, (low, high) in NUMERIC_RANGES.items():
        value = candidate.get(field)
        if value is None:
            continue
        if not _is_number(value) or not low <= value <= high:
            errors.append(f"Invalid value for {field}: {value!r} (expected a number between {low} and {high})")

    social = candidate.get("social")
    if social is not None and not isinstance(social, bool):
        errors.append(f"Invalid value for social: {social!r} (expected true or false)")

    mood = candidate.get("mood")
    if mood is not None and not isinstance(mood, str):
        errors.append(f"Invalid value for mood: {mood!r} (expected a string)")

    nutrition = candidate.get("nutrition")
    if nutrition is not None:
        if not isinstance(nutrition, list):
            errors.append(f"Invalid value for nutrition: {nutrition!r} (expected a list)")
        elif not all(isinstance(item, str) for item in nutrition):
            errors.append(f"Invalid value for nutrition: {nutrition!r} (items must be strings)")

    return errors
