from fastapi import APIRouter, Body, Depends, HTTPException, Path
from typing import Any

from database import LogStore, StorageCorruption, get_log_store
from models import DATE_PATTERN, LogRecord, StoredRecord
from services.validation import validate_log

router = APIRouter(tags=["日志"])

def read_log(store: LogStore, date: str) -> StoredRecord:
    """读取某天记录，不存在返回404，文件损坏返回500"""
    try:
        record = store.get_by_date(date)
    except StorageCorruption:
        raise HTTPException(status_code=500, detail="Failed to read log file")
    if record is None:
        raise HTTPException(status_code=404, detail="Log not found for this date")
    return record

@router.post("/logs")
async def save_log(
    payload: Any = Body(...),
    store: LogStore = Depends(get_log_store)
):
    """保存某天的记录，同一天再次提交视为更新"""
    violations = validate_log(payload)
    if violations:
        raise HTTPException(status_code=400, detail={"error": "Invalid log", "violations": violations})

    result = store.upsert(LogRecord.model_validate(payload))

    return {
        "success": True,
        "message": "Log saved successfully" if result.created else "Log updated successfully",
        "created": result.created,
        "data": result.record,
        "filename": f"{result.record.date}.json"
    }

@router.get("/logs")
async def list_logs(store: LogStore = Depends(get_log_store)):
    """获取全部记录（最新的在前），损坏的文件会被跳过"""
    logs = []
    skipped = 0
    for entry in store.scan():
        if entry.ok:
            logs.append(entry.record)
        else:
            skipped += 1

    logs.sort(key=lambda r: r.date, reverse=True)

    return {
        "success": True,
        "data": logs,
        "count": len(logs),
        "skipped": skipped
    }

@router.get("/logs/{date}")
async def get_log(
    date: str = Path(..., pattern=DATE_PATTERN),
    store: LogStore = Depends(get_log_store)
):
    """获取某天的记录"""
    return {"success": True, "data": read_log(store, date)}

@router.get("/wellness-logs/{date}", response_model=StoredRecord, response_model_exclude_none=True)
async def get_raw_log(
    date: str = Path(..., pattern=DATE_PATTERN),
    store: LogStore = Depends(get_log_store)
):
    """周视图使用：直接返回记录本身，不包装"""
    return read_log(store, date)

@router.delete("/logs/{date}")
async def delete_log(
    date: str = Path(..., pattern=DATE_PATTERN),
    store: LogStore = Depends(get_log_store)
):
    """删除某天的记录"""
    if not store.delete_by_date(date):
        raise HTTPException(status_code=404, detail="Log not found for this date")

    return {"success": True, "message": "Log deleted successfully"}
