from fastapi import APIRouter, Depends, Path
from datetime import date as date_type

from database import LogStore, get_log_store
from models import DATE_PATTERN, WeeklyStats, WeekWindow
from routers.logs import read_log
from services.aggregation import aggregate
from services.dates import get_today
from services.scoring import petal_breakdown, score
from services.week import build_window

router = APIRouter(tags=["周视图"])

@router.get("/week", response_model=WeekWindow)
async def get_week(
    store: LogStore = Depends(get_log_store),
    today: date_type = Depends(get_today)
):
    """今天和前6天，缺失的日期 log 为 null"""
    return build_window(store, today)

@router.get("/week/stats", response_model=WeeklyStats)
async def get_week_stats(
    store: LogStore = Depends(get_log_store),
    today: date_type = Depends(get_today)
):
    """本周统计数据"""
    return aggregate(build_window(store, today))

@router.get("/flower/{date}")
async def get_flower(
    date: str = Path(..., pattern=DATE_PATTERN),
    store: LogStore = Depends(get_log_store)
):
    """某天的花瓣数以及每个花瓣是否点亮"""
    record = read_log(store, date)
    return {
        "date": date,
        "petals": score(record),
        "breakdown": petal_breakdown(record)
    }
