from models import WeeklyStats, WeekWindow
from services.scoring import KEY_NUTRIENTS

SUMMED_FIELDS = [
    "sunlight_minutes",
    "water_liters",
    "movement_minutes",
    "sleep_hours",
    "mental_reset_minutes",
]


def has_nutrient(entries, name: str) -> bool:
    """不区分大小写的子串匹配"""
    needle = name.lower()
    return any(needle in entry.lower() for entry in entries)


def aggregate(window: WeekWindow) -> WeeklyStats:
    """把一周的记录汇总成统计数据，供总结使用"""
    logged = [slot for slot in window.days if slot.has_log]
    days_logged = len(logged)

    if days_logged == 0:
        return WeeklyStats(
            start_date=window.start_date,
            end_date=window.end_date,
            has_data=False,
            days_logged=0,
        )

    totals = {field: 0 for field in SUMMED_FIELDS}
    social_days = 0
    all_nutrition = []
    for slot in logged:
        record = slot.log
        for field in SUMMED_FIELDS:
            totals[field] += getattr(record, field) or 0
        if record.social is True:
            social_days += 1
        all_nutrition.extend(record.nutrition or [])

    stats = {}
    for field in SUMMED_FIELDS:
        stats[f"total_{field}"] = totals[field]
        stats[f"avg_{field}"] = totals[field] / days_logged

    tryptophan, greens, healthy_fats = (has_nutrient(all_nutrition, n) for n in KEY_NUTRIENTS)

    return WeeklyStats(
        start_date=window.start_date,
        end_date=window.end_date,
        has_data=True,
        days_logged=days_logged,
        social_days=social_days,
        nutrition_variety=len(set(all_nutrition)),
        has_tryptophan=tryptophan,
        has_greens=greens,
        has_healthy_fats=healthy_fats,
        total_activities=sum(slot.petals for slot in window.days),
        **stats,
    )
