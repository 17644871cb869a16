from collections import defaultdict
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from campus_records.model import FacultyRecord

# (field name, label, renders as link)
_DIRECTORY_FIELDS = [
    ("office", "Office", False),
    ("email", "Email", False),
    ("phone", "Phone", False),
    ("linkedin", "LinkedIn", True),
    ("education", "Education", False),
    ("specialization", "Specialization", False),
]


class FacultyField(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    value: str
    order: int
    is_link: bool = False


class ResponseFacultyMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    title: str
    image_url: str | None
    fields: list[FacultyField]


def visible_fields(member: FacultyRecord) -> list[FacultyField]:
    """
    Returns the filled in profile fields of the member ordered by their
    display order. Fields with equal order keep their default position.
    """
    fields = [
        FacultyField(
            key=key,
            label=label,
            value=value,
            order=getattr(member, f"{key}_display_order"),
            is_link=is_link,
        )
        for key, label, is_link in _DIRECTORY_FIELDS
        if (value := getattr(member, key))
    ]

    return sorted(fields, key=lambda field: field.order)


def group_by_category(
    members: Iterable[FacultyRecord], default_category: str = "Diğer"
) -> dict[str, list[ResponseFacultyMember]]:
    grouped: dict[str, list[ResponseFacultyMember]] = defaultdict(list)
    for member in members:
        grouped[member.category or default_category].append(
            ResponseFacultyMember(
                id=member.id,
                name=member.name,
                title=member.title,
                image_url=member.image_url,
                fields=visible_fields(member),
            )
        )

    return {category: grouped[category] for category in sorted(grouped)}
