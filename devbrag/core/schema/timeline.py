import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum


class Granularity(Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


@dataclass(frozen=True, slots=True)
class DateRange:
    start: date
    end: date

    @property
    def span_days(self) -> int:
        return abs((self.end - self.start).days)

    @property
    def is_inverted(self) -> bool:
        return self.start > self.end

    @classmethod
    def last_months(cls, today: date, months: int) -> "DateRange":
        return cls(start=shift_months(today, -months), end=today)

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


@dataclass(frozen=True, slots=True)
class TimelineBucket:
    key: str
    label: str
    pr_count: int
    commit_count: int
    timestamp: int


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by whole months, clamping to the last day of the target month."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))
