from datetime import date, datetime, timedelta
from typing import List

DATE_FORMAT = "%Y-%m-%d"


def get_today() -> date:
    """本地时间的今天"""
    return datetime.now().date()


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def window_dates(end: date, days: int = 7) -> List[date]:
    """以 end 结尾的连续 days 天，最早的在前"""
    return [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def cutoff_date(reference: date, days: int = 7) -> str:
    """保留窗口的第一天；早于它的记录都会被删除"""
    return format_date(reference - timedelta(days=days - 1))


def day_label(days_ago: int) -> str:
    if days_ago == 0:
        return "Today"
    return f"{days_ago} day{'s' if days_ago > 1 else ''} ago"


def range_label(start: date, end: date) -> str:
    """例如 June 4 – June 10"""
    return f"{start.strftime('%B')} {start.day} – {end.strftime('%B')} {end.day}"
