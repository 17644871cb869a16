from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from marker_index.marker import Marker


class MarkerDiff(BaseModel):
    model_config = ConfigDict(frozen=True)

    added: list[Marker] = Field(default_factory=list)
    updated: list[Marker] = Field(default_factory=list)
    removed: list[Marker] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.updated or self.removed)


def diff_markers(
    previous: Mapping[str, Marker], current: Mapping[str, Marker]
) -> MarkerDiff:
    """
    Computes which markers have to be added, replaced or removed to turn the
    previously rendered marker set into the current one.
    """
    added: list[Marker] = []
    updated: list[Marker] = []
    for marker_id, marker in current.items():
        if (previous_marker := previous.get(marker_id)) is None:
            added.append(marker)
        elif previous_marker != marker:
            updated.append(marker)

    removed = [
        marker for marker_id, marker in previous.items() if marker_id not in current
    ]

    return MarkerDiff(added=added, updated=updated, removed=removed)
