from fastapi import APIRouter, Depends, HTTPException, Path
from datetime import date as date_type

from database import LogStore, get_log_store
from models import DATE_PATTERN, SummaryResponse
from routers.logs import read_log
from services.aggregation import aggregate
from services.dates import get_today
from services.summary import (
    OllamaClient,
    SummaryUnavailable,
    build_day_prompt,
    build_week_prompt,
    get_summary_client,
)
from services.week import build_window

router = APIRouter(prefix="/summary", tags=["总结"])

@router.get("/day/{date}", response_model=SummaryResponse, response_model_exclude_none=True)
async def summarize_day(
    date: str = Path(..., pattern=DATE_PATTERN),
    store: LogStore = Depends(get_log_store),
    client: OllamaClient = Depends(get_summary_client)
):
    """单日总结"""
    record = read_log(store, date)
    try:
        text = await client.generate(build_day_prompt(record))
    except SummaryUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    return SummaryResponse(date=date, summary=text, model=client.model)

@router.get("/week", response_model=SummaryResponse)
async def summarize_week(
    store: LogStore = Depends(get_log_store),
    today: date_type = Depends(get_today),
    client: OllamaClient = Depends(get_summary_client)
):
    """一周总结，同时返回统计数据"""
    window = build_window(store, today)
    stats = aggregate(window)
    try:
        text = await client.generate(build_week_prompt(window, stats))
    except SummaryUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    return SummaryResponse(summary=text, model=client.model, stats=stats)
