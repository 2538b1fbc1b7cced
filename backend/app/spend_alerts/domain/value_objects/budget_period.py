"""BudgetPeriod value object for calendar-month budget windows."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Self
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class BudgetPeriod:
    """Immutable value object representing one calendar month.

    Budgets are keyed by the period string ("YYYY-MM") and their spending
    metric covers every transaction dated from the first day of the month
    through the end of its last day.

    Attributes:
        year: Four-digit calendar year.
        month: Calendar month (1-12).
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        """Validate the month after initialization."""
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def containing(cls, moment: datetime, tz_name: str = "UTC") -> Self:
        """Build the period that contains a moment in the given timezone.

        Args:
            moment: A timezone-aware datetime.
            tz_name: IANA timezone used to decide the calendar month.

        Returns:
            The BudgetPeriod for that local month.
        """
        local = moment.astimezone(ZoneInfo(tz_name))
        return cls(local.year, local.month)

    @classmethod
    def from_key(cls, key: str) -> Self:
        """Parse a "YYYY-MM" period key.

        Raises:
            ValueError: If the key is not a valid period string.
        """
        try:
            year_str, month_str = key.split("-")
            return cls(int(year_str), int(month_str))
        except (AttributeError, ValueError) as e:
            raise ValueError(f"Invalid period key: {key!r}") from e

    @property
    def key(self) -> str:
        """Period key as stored on budgets, e.g. "2024-03"."""
        return f"{self.year}-{self.month:02d}"

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def bounds(self, tz_name: str = "UTC") -> tuple[datetime, datetime]:
        """Inclusive start and end instants of the period.

        Args:
            tz_name: IANA timezone the month boundaries are drawn in.

        Returns:
            Tuple of (start, end) timezone-aware datetimes.
        """
        tz = ZoneInfo(tz_name)
        start = datetime.combine(self.first_day, time.min, tzinfo=tz)
        end = datetime.combine(self.last_day, time.max, tzinfo=tz)
        return start, end

    def __str__(self) -> str:
        return self.key
