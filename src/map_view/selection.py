from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from campus_records import CourseRecord, FacultyRecord
from marker_index import MarkerKind


class SelectedItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    kind: Literal[MarkerKind.FACULTY, MarkerKind.COURSE]
    entity: FacultyRecord | CourseRecord
    marker_id: str | None = None

    @property
    def coordinates(self) -> tuple[float, float] | None:
        return self.entity.coordinates


class NoSelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Default factory hides default value in OpenAPI schema
    status: Literal["none"] = Field(default_factory=lambda: "none")


class Selected(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["selected"] = Field(default_factory=lambda: "selected")
    item: SelectedItem


SelectionState = Annotated[NoSelection | Selected, Field(discriminator="status")]
