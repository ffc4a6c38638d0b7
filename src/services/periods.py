"""Calendar periods used by the statistics engine."""

import calendar
from dataclasses import dataclass
from datetime import datetime


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month of the proleptic Gregorian calendar."""
    return calendar.monthrange(year, month)[1]


def start_of_month(moment: datetime) -> datetime:
    """Midnight on the first day of the month containing ``moment``."""
    return datetime(moment.year, moment.month, 1)


@dataclass(frozen=True)
class Period:
    """A calendar month (``month`` set) or a calendar year (``month`` is None).

    ``start`` is inclusive and ``end`` exclusive.
    """

    year: int
    month: int | None = None

    def __post_init__(self) -> None:
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")

    @property
    def is_month(self) -> bool:
        return self.month is not None

    @property
    def start(self) -> datetime:
        return datetime(self.year, self.month or 1, 1)

    @property
    def end(self) -> datetime:
        return self.next().start

    @property
    def days(self) -> int:
        if self.month is None:
            return 366 if calendar.isleap(self.year) else 365
        return days_in_month(self.year, self.month)

    def previous(self) -> "Period":
        if self.month is None:
            return Period(self.year - 1)
        if self.month == 1:
            return Period(self.year - 1, 12)
        return Period(self.year, self.month - 1)

    def next(self) -> "Period":
        if self.month is None:
            return Period(self.year + 1)
        if self.month == 12:
            return Period(self.year + 1, 1)
        return Period(self.year, self.month + 1)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end
