from enum import StrEnum
from typing import Any, Self


class TagKey(StrEnum):
    BUILDING = "building"
    AMENITY = "amenity"
    OFFICE = "office"
    NAME = "name"
    OTHER = "other"

    @classmethod
    def get_by_value_safe(cls, value: Any) -> Self:
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER
