from fastapi import APIRouter, Depends
from datetime import date as date_type

from config import RETENTION_DAYS
from database import LogStore, get_log_store
from models import CleanupResult
from services.dates import get_today
from services.retention import RetentionManager

router = APIRouter(prefix="/maintenance", tags=["维护"])

@router.post("/cleanup", response_model=CleanupResult)
def run_cleanup(
    store: LogStore = Depends(get_log_store),
    today: date_type = Depends(get_today)
):
    """手动执行一次清理（普通函数，在线程池中运行）"""
    return RetentionManager(store, RETENTION_DAYS).run_cleanup(today)
