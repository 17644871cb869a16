import datetime
from enum import StrEnum
from typing import Any


class Weekday(StrEnum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, date: datetime.date) -> "Weekday":
        return list(cls)[date.weekday()]

    @classmethod
    def _missing_(cls, value: Any) -> "Weekday | None":
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member

        return None
