import datetime
import logging
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    field_validator,
    model_validator,
)

from campus_records.weekday import Weekday

logger = logging.getLogger(__name__)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None

    return value


class BaseCampusRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    lat: float | None = None
    lon: float | None = None

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, value: Any) -> Any:
        # Remote rows may use integer or uuid keys
        if isinstance(value, int):
            return str(value)

        return value

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def validate_coordinate(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @property
    def coordinates(self) -> tuple[float, float] | None:
        if self.lat is None or self.lon is None:
            return None

        return (self.lat, self.lon)


class FacultyRecord(BaseCampusRecord):
    """
    Faculty member as stored in the remote `faculty_members` table.
    Optional text fields are None when absent or blank, display orders default to 0.
    """

    name: str = ""
    title: str = ""
    department: str = ""
    office: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    image_url: str | None = None
    education: str | None = None
    specialization: str | None = None
    category: str | None = None
    display_order: int = 0
    office_display_order: int = 0
    email_display_order: int = 0
    phone_display_order: int = 0
    linkedin_display_order: int = 0
    education_display_order: int = 0
    specialization_display_order: int = 0

    @field_validator("name", "title", "department", mode="before")
    @classmethod
    def validate_required_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator(
        "office",
        "email",
        "phone",
        "linkedin",
        "image_url",
        "education",
        "specialization",
        "category",
        mode="before",
    )
    @classmethod
    def validate_optional_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator(
        "display_order",
        "office_display_order",
        "email_display_order",
        "phone_display_order",
        "linkedin_display_order",
        "education_display_order",
        "specialization_display_order",
        mode="before",
    )
    @classmethod
    def validate_display_order(cls, value: Any) -> Any:
        return 0 if value is None or value == "" else value


class ScheduleSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: Weekday
    start_time: datetime.time
    end_time: datetime.time


class CourseRecord(BaseCampusRecord):
    """
    Weekly course session as stored in the remote `courses` table.
    Several sessions may take place in the same room.
    """

    code: str = ""
    name: str = ""
    instructor: str = ""
    room: str | None = None
    schedule: ScheduleSlot | None = None

    @model_validator(mode="before")
    @classmethod
    def fold_schedule_columns(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "schedule" in data:
            return data

        data = dict(data)
        day = data.pop("day", None)
        start_time = data.pop("start_time", None)
        end_time = data.pop("end_time", None)
        if not (day and start_time and end_time):
            return data

        try:
            data["schedule"] = ScheduleSlot(
                day=day, start_time=start_time, end_time=end_time
            )
        except ValidationError as exc:
            logger.warning(
                "Ignoring invalid schedule of course %s: %s",
                data.get("id"),
                exc.errors(include_url=False),
            )

        return data

    @field_validator("code", "name", "instructor", mode="before")
    @classmethod
    def validate_required_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("room", mode="before")
    @classmethod
    def validate_room(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        return value.strip() if isinstance(value, str) else value


class FacultyMemberInput(BaseModel):
    """
    Payload of the admin form used to create or update a faculty member.
    """

    name: str
    title: str
    department: str = ""
    office: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    image_url: str | None = None
    education: str | None = None
    specialization: str | None = None
    category: str | None = None
    lat: float | None = None
    lon: float | None = None
    display_order: int = 0
    office_display_order: int = 0
    email_display_order: int = 0
    phone_display_order: int = 0
    linkedin_display_order: int = 0
    education_display_order: int = 0
    specialization_display_order: int = 0

    @field_validator(
        "office",
        "email",
        "phone",
        "linkedin",
        "image_url",
        "education",
        "specialization",
        "category",
        "lat",
        "lon",
        mode="before",
    )
    @classmethod
    def validate_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator(
        "display_order",
        "office_display_order",
        "email_display_order",
        "phone_display_order",
        "linkedin_display_order",
        "education_display_order",
        "specialization_display_order",
        mode="before",
    )
    @classmethod
    def validate_display_order(cls, value: Any) -> Any:
        return 0 if value is None or value == "" else value

    def to_row(self) -> dict[str, Any]:
        return self.model_dump()
