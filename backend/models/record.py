from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union
from datetime import datetime

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
Number = Union[int, float]

class LogRecord(BaseModel):
    """一天的打卡记录（不含时间戳）"""
    model_config = ConfigDict(extra="ignore")

    date: str = Field(pattern=DATE_PATTERN)  # YYYY-MM-DD，唯一键
    sunlight_minutes: Number
    water_liters: Number
    movement_minutes: Number
    sleep_hours: Number
    mental_reset_minutes: Optional[Number] = None
    social: Optional[bool] = None
    mood: Optional[str] = None
    nutrition: Optional[List[str]] = None

class StoredRecord(LogRecord):
    created_at: datetime
    updated_at: datetime

class SaveResult(BaseModel):
    record: StoredRecord
    created: bool  # True=新建, False=更新

class PetalBreakdown(BaseModel):
    sunlight: bool = False
    water: bool = False
    nutrition: bool = False
    movement: bool = False
    sleep: bool = False
    social: bool = False
    mental_reset: bool = False

class WeekSlot(BaseModel):
    date: str
    label: str  # "Today" / "N days ago"
    is_today: bool
    log: Optional[StoredRecord] = None  # None 表示当天没有记录
    petals: int = 0

    @property
    def has_log(self) -> bool:
        return self.log is not None

class WeekWindow(BaseModel):
    start_date: str
    end_date: str
    range_label: str
    days: List[WeekSlot]

class WeeklyStats(BaseModel):
    start_date: str
    end_date: str
    has_data: bool
    days_logged: int
    total_sunlight_minutes: Optional[float] = None
    total_water_liters: Optional[float] = None
    total_movement_minutes: Optional[float] = None
    total_sleep_hours: Optional[float] = None
    total_mental_reset_minutes: Optional[float] = None
    avg_sunlight_minutes: Optional[float] = None
    avg_water_liters: Optional[float] = None
    avg_movement_minutes: Optional[float] = None
    avg_sleep_hours: Optional[float] = None
    avg_mental_reset_minutes: Optional[float] = None
    social_days: Optional[int] = None
    nutrition_variety: Optional[int] = None
    has_tryptophan: Optional[bool] = None
    has_greens: Optional[bool] = None
    has_healthy_fats: Optional[bool] = None
    total_activities: Optional[int] = None
