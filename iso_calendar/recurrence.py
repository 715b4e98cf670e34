"""Recurrence patterns an event can follow."""

from __future__ import annotations

from enum import Enum


class RecurrencePattern(str, Enum):
    """Closed set of recurrence rules.

    The daily, weekly, monthly and quarterly rules are only evaluated for
    events anchored on a month/day date.
    """

    NONE = "None"
    EVERY_DAY = "EveryDay"
    EVERY_WEEK = "EveryWeek"
    EVERY_MONTH = "EveryMonth"
    EVERY_QUARTER = "EveryQuarter"
    EVERY_YEAR = "EveryYear"
    EVERY_2_YEARS = "Every2Years"
    EVERY_3_YEARS = "Every3Years"
    EVERY_5_YEARS = "Every5Years"
    EVERY_10_YEARS = "Every10Years"

    @property
    def years(self) -> int | None:
        """Interval in years for the yearly rules, otherwise None."""
        return _YEARLY_INTERVALS.get(self)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str) -> RecurrencePattern:
        """Look up a pattern by its tag.

        Raises:
            ValueError: If the tag is unknown
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"unknown recurrence {value!r}, expected one of {', '.join(p.value for p in cls)}"
            ) from None


_YEARLY_INTERVALS = {
    RecurrencePattern.EVERY_YEAR: 1,
    RecurrencePattern.EVERY_2_YEARS: 2,
    RecurrencePattern.EVERY_3_YEARS: 3,
    RecurrencePattern.EVERY_5_YEARS: 5,
    RecurrencePattern.EVERY_10_YEARS: 10,
}

_LABELS = {
    RecurrencePattern.NONE: "Does not repeat",
    RecurrencePattern.EVERY_DAY: "Every day",
    RecurrencePattern.EVERY_WEEK: "Every week",
    RecurrencePattern.EVERY_MONTH: "Every month",
    RecurrencePattern.EVERY_QUARTER: "Every quarter",
    RecurrencePattern.EVERY_YEAR: "Every year",
    RecurrencePattern.EVERY_2_YEARS: "Every 2 years",
    RecurrencePattern.EVERY_3_YEARS: "Every 3 years",
    RecurrencePattern.EVERY_5_YEARS: "Every 5 years",
    RecurrencePattern.EVERY_10_YEARS: "Every 10 years",
}
