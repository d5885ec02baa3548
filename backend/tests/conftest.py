import os
import tempfile
from datetime import date, datetime, timedelta, timezone

import pytest

# 在导入 config 之前设置，避免写到真实目录或启动定时任务
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="shichi-logs-"))
os.environ["DAILY_CLEANUP"] = "false"

from fastapi.testclient import TestClient

from database import LogStore, get_log_store
from main import app
from services.dates import get_today

TODAY = date(2024, 6, 10)


class FakeClock:
    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


def make_log(**overrides) -> dict:
    data = {
        "date": "2024-06-10",
        "sunlight_minutes": 15,
        "water_liters": 2.5,
        "movement_minutes": 35,
        "sleep_hours": 7.5,
        "social": True,
        "mental_reset_minutes": 5,
        "mood": "calm",
        "nutrition": ["Tryptophan", "Greens", "Healthy Fats"],
    }
    data.update(overrides)
    return data


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 6, 10, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(tmp_path, clock):
    s = LogStore(tmp_path / "wellness_logs", clock=clock)
    s.ensure_root()
    return s


@pytest.fixture
def client(store):
    app.dependency_overrides[get_log_store] = lambda: store
    app.dependency_overrides[get_today] = lambda: TODAY
    yield TestClient(app)
    app.dependency_overrides.clear()
