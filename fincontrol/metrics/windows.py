"""
Month Windows

A month window is the inclusive range from the 1st to the last calendar
day of a month. The last day is "day 0 of the next month", i.e. the
first of the following month minus one day.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class MonthWindow(BaseModel):
    """Inclusive [start, end] range covering one calendar month."""
    model_config = ConfigDict(frozen=True)

    start: dt.date = Field(..., description="First day of the month")
    end: dt.date = Field(..., description="Last day of the month")

    @property
    def days(self) -> int:
        """Number of days in the month."""
        return self.end.day

    @property
    def month(self) -> int:
        return self.start.month

    def contains(self, day: dt.date) -> bool:
        return self.start <= day <= self.end

    def shifted(self, months: int) -> "MonthWindow":
        """The window `months` months later (negative for earlier)."""
        return month_window(add_months(self.start, months))

    @property
    def label(self) -> str:
        """Short month name, e.g. 'Jan'."""
        return self.start.strftime("%b")


def add_months(day: dt.date, months: int) -> dt.date:
    """First day of the month `months` away from the month containing `day`."""
    year, month_index = divmod(day.year * 12 + (day.month - 1) + months, 12)
    return dt.date(year, month_index + 1, 1)


def month_window(month: dt.date) -> MonthWindow:
    """Window for the month containing the given date (or datetime)."""
    if isinstance(month, dt.datetime):
        month = month.date()
    start = month.replace(day=1)
    end = add_months(start, 1) - dt.timedelta(days=1)
    return MonthWindow(start=start, end=end)
