from pydantic import BaseModel
from typing import Optional

from .record import WeeklyStats

class CleanupResult(BaseModel):
    cutoff_date: str  # 早于该日期的记录会被删除
    deleted_count: int = 0
    kept_count: int = 0
    failed_count: int = 0

class SummaryResponse(BaseModel):
    date: Optional[str] = None
    summary: str
    model: str
    stats: Optional[WeeklyStats] = None
