import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import Awaitable, Callable, Optional

from database import LogStore, StorageError
from models import CleanupResult
from services.dates import cutoff_date

logger = logging.getLogger(__name__)


class RetentionManager:
    """删除保留窗口（今天 + 前6天）之外的记录"""

    def __init__(self, store: LogStore, retention_days: int = 7):
        self.store = store
        self.retention_days = retention_days

    def run_cleanup(self, reference: date) -> CleanupResult:
        cutoff = cutoff_date(reference, self.retention_days)
        result = CleanupResult(cutoff_date=cutoff)

        dates = self.store.list_dates()
        if not dates:
            logger.info("No log files to clean up")
            return result

        for date_str in sorted(dates):
            # YYYY-MM-DD 补零格式，字符串顺序等于日期顺序
            if date_str >= cutoff:
                result.kept_count += 1
                continue
            try:
                if self.store.delete_by_date(date_str):
                    result.deleted_count += 1
            except StorageError as e:
                logger.warning("Failed to delete %s.json: %s", date_str, e)
                result.failed_count += 1

        if result.deleted_count:
            logger.info(
                "Cleanup completed: %d old files deleted, %d files kept",
                result.deleted_count, result.kept_count,
            )
        else:
            logger.info("All %d log files are within the %d-day retention period",
                        result.kept_count, self.retention_days)
        return result


def next_run_at(now: datetime, hour: int) -> datetime:
    """now 之后最近一次的 hour:00"""
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return target


class RetentionScheduler:
    """每天在固定时刻执行一次清理，每次执行后重新计算下一次时间"""

    def __init__(
        self,
        manager: RetentionManager,
        hour: int = 2,
        now: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.manager = manager
        self.hour = hour
        self.now = now
        self.sleep = sleep
        self.runs = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_now(self) -> Optional[CleanupResult]:
        """同步执行一次清理，任何异常只记录日志"""
        try:
            return self.manager.run_cleanup(self.now().date())
        except Exception:
            logger.exception("Error during log cleanup")
            return None
        finally:
            self.runs += 1

    async def _loop(self) -> None:
        while True:
            now = self.now()
            target = next_run_at(now, self.hour)
            logger.info("Next daily cleanup scheduled for: %s", target.strftime("%Y-%m-%d %H:%M"))
            # 提前醒来时继续睡到目标时间，避免同一时刻执行两次
            while now < target:
                await self.sleep((target - now).total_seconds())
                now = self.now()
            logger.info("Running scheduled daily cleanup...")
            await asyncio.to_thread(self.run_now)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
