# Models package
from .record import (
    DATE_PATTERN,
    LogRecord,
    StoredRecord,
    SaveResult,
    PetalBreakdown,
    WeekSlot,
    WeekWindow,
    WeeklyStats,
)
from .maintenance import CleanupResult, SummaryResponse
