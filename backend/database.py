import json
import logging
import os
import re
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from pydantic import ValidationError

from config import LOGS_DIR
from models import LogRecord, SaveResult, StoredRecord

logger = logging.getLogger(__name__)

# 每天一个文件: YYYY-MM-DD.json
LOG_FILE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})\.json")
DATE_KEY_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
LOCK_STRIPES = 32


class StorageError(Exception):
    pass


class StorageUnavailable(StorageError):
    """存储目录本身无法读写"""


class StorageCorruption(StorageError):
    """单个文件无法解析"""

    def __init__(self, date: str, reason: str):
        super().__init__(f"Corrupted log for {date}: {reason}")
        self.date = date
        self.reason = reason


@dataclass
class ScanEntry:
    date: str
    record: Optional[StoredRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_date_key(value: str) -> bool:
    return bool(DATE_KEY_RE.fullmatch(value or ""))


class LogStore:
    """按日期存储打卡记录，一个日期对应一个 JSON 文件"""

    def __init__(self, root, clock: Callable[[], datetime] = utcnow):
        self.root = Path(root)
        self.clock = clock
        self._locks = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def ensure_root(self) -> None:
        """创建存储目录，失败时抛出 StorageUnavailable"""
        try:
            created = not self.root.exists()
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Cannot create logs directory {self.root}: {e}") from e
        if not os.access(self.root, os.R_OK | os.W_OK):
            raise StorageUnavailable(f"Logs directory {self.root} is not readable/writable")
        if created:
            logger.info("Created logs directory %s", self.root)

    def path_for(self, date: str) -> Path:
        if not is_date_key(date):
            raise ValueError(f"Invalid log date: {date!r}")
        return self.root / f"{date}.json"

    def _lock_for(self, date: str) -> threading.Lock:
        # 固定数量的锁，同一日期总是落在同一把锁上
        return self._locks[hash(date) % LOCK_STRIPES]

    def _read(self, date: str) -> Optional[StoredRecord]:
        path = self.path_for(date)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageUnavailable(f"Failed to read {path.name}: {e}") from e

        try:
            record = StoredRecord.model_validate(json.loads(content))
        except (ValueError, ValidationError) as e:
            raise StorageCorruption(date, str(e).splitlines()[0]) from e
        if record.date != date:
            raise StorageCorruption(date, f"file holds a log for {record.date}")
        return record

    def _write(self, record: StoredRecord) -> None:
        path = self.path_for(record.date)
        tmp_path = path.with_name(f".{path.name}.tmp")
        data = record.model_dump(mode="json", exclude_none=True)
        try:
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageUnavailable(f"Failed to write {path.name}: {e}") from e

    def upsert(self, record: LogRecord) -> SaveResult:
        """新建或更新某天的记录；created_at 只在第一次写入时设置"""
        with self._lock_for(record.date):
            try:
                existing = self._read(record.date)
            except StorageCorruption as e:
                logger.warning("Overwriting corrupted log %s (%s)", record.date, e.reason)
                existing = None

            now = self.clock()
            if existing:
                created_at = existing.created_at
                previous = existing.updated_at
                if previous.tzinfo is None:
                    previous = previous.replace(tzinfo=timezone.utc)
                # 时钟回拨时不让 updated_at 倒退
                updated_at = max(now, previous)
            else:
                created_at = updated_at = now

            stored = StoredRecord(
                **record.model_dump(),
                created_at=created_at,
                updated_at=updated_at,
            )
            self._write(stored)

        logger.info("%s log for %s", "Updated" if existing else "Saved", record.date)
        return SaveResult(record=stored, created=existing is None)

    def get_by_date(self, date: str) -> Optional[StoredRecord]:
        """返回某天的记录，不存在时返回 None"""
        return self._read(date)

    def list_dates(self) -> List[str]:
        """所有合法文件名对应的日期（不解析内容）"""
        try:
            names = [p.name for p in self.root.iterdir()]
        except OSError as e:
            raise StorageUnavailable(f"Failed to read logs directory {self.root}: {e}") from e
        dates = []
        for name in names:
            match = LOG_FILE_RE.fullmatch(name)
            if match:
                dates.append(match.group(1))
        return dates

    def scan(self) -> Iterator[ScanEntry]:
        """逐个读取记录，损坏的文件单独标记，不影响其他记录"""
        for date in self.list_dates():
            try:
                record = self._read(date)
            except StorageCorruption as e:
                logger.warning("Skipping corrupted file: %s.json (%s)", date, e.reason)
                yield ScanEntry(date=date, error=e.reason)
                continue
            if record is not None:
                yield ScanEntry(date=date, record=record)

    def list_all(self) -> List[StoredRecord]:
        return [entry.record for entry in self.scan() if entry.ok]

    def delete_by_date(self, date: str) -> bool:
        """删除某天的记录，不存在时返回 False"""
        path = self.path_for(date)
        with self._lock_for(date):
            try:
                path.unlink()
            except FileNotFoundError:
                return False
            except OSError as e:
                raise StorageUnavailable(f"Failed to delete {path.name}: {e}") from e
        logger.info("Deleted log for %s", date)
        return True


log_store = LogStore(LOGS_DIR)


def get_log_store() -> LogStore:
    return log_store
