from datetime import date

from models import LogRecord
from services.week import build_window
from conftest import TODAY, make_log


def seed(store, day, **overrides):
    store.upsert(LogRecord.model_validate(make_log(date=day, **overrides)))


def test_window_always_has_seven_slots_oldest_first(store):
    window = build_window(store, TODAY)
    assert [s.date for s in window.days] == [
        "2024-06-04", "2024-06-05", "2024-06-06", "2024-06-07",
        "2024-06-08", "2024-06-09", "2024-06-10",
    ]
    assert window.start_date == "2024-06-04"
    assert window.end_date == "2024-06-10"
    assert all(not s.has_log and s.petals == 0 for s in window.days)


def test_labels_and_today_flag(store):
    window = build_window(store, TODAY)
    assert [s.label for s in window.days] == [
        "6 days ago", "5 days ago", "4 days ago", "3 days ago", "2 days ago", "1 day ago", "Today",
    ]
    assert [s.is_today for s in window.days] == [False] * 6 + [True]


def test_slots_carry_logs_and_scores(store):
    seed(store, "2024-06-10")
    seed(store, "2024-06-07", nutrition=["Greens"])
    seed(store, "2024-06-01")  # 窗口之外

    window = build_window(store, TODAY)
    by_date = {s.date: s for s in window.days}
    assert by_date["2024-06-10"].petals == 7
    assert by_date["2024-06-07"].petals == 6
    assert by_date["2024-06-07"].log.nutrition == ["Greens"]
    assert sum(1 for s in window.days if s.has_log) == 2


def test_corrupted_day_is_treated_as_missing(store):
    seed(store, "2024-06-09")
    (store.root / "2024-06-08.json").write_text("[]", encoding="utf-8")
    window = build_window(store, TODAY)
    by_date = {s.date: s for s in window.days}
    assert by_date["2024-06-08"].log is None
    assert by_date["2024-06-09"].log is not None


def test_window_crosses_month_boundary(store):
    window = build_window(store, date(2024, 3, 2))
    assert window.start_date == "2024-02-25"
    assert window.range_label == "February 25 – March 2"


def test_building_window_does_not_touch_storage(store):
    seed(store, "2024-06-10")
    before = sorted(p.name for p in store.root.iterdir())
    build_window(store, TODAY)
    assert sorted(p.name for p in store.root.iterdir()) == before
