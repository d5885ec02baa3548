import logging
from datetime import date

from database import LogStore, StorageCorruption
from models import WeekSlot, WeekWindow
from services.dates import day_label, format_date, range_label, window_dates
from services.scoring import score

logger = logging.getLogger(__name__)

WINDOW_DAYS = 7


def build_window(store: LogStore, reference: date) -> WeekWindow:
    """构建以 reference 结尾的 7 天视图，缺失的日期留空而不是报错"""
    dates = window_dates(reference, WINDOW_DAYS)
    days = []
    for day in dates:
        date_str = format_date(day)
        try:
            record = store.get_by_date(date_str)
        except StorageCorruption as e:
            logger.warning("Treating corrupted log %s as missing (%s)", date_str, e.reason)
            record = None

        days_ago = (reference - day).days
        days.append(WeekSlot(
            date=date_str,
            label=day_label(days_ago),
            is_today=days_ago == 0,
            log=record,
            petals=score(record),
        ))

    return WeekWindow(
        start_date=format_date(dates[0]),
        end_date=format_date(dates[-1]),
        range_label=range_label(dates[0], dates[-1]),
        days=days,
    )
